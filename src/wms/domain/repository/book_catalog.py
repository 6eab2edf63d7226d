"""Abstract read-only view of the book catalog.

The catalog belongs to another part of the business.  The warehouse
only needs to know whether a book exists and to enumerate books for
stock reports, so nothing here mutates it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.book import Book


class BookCatalog(ABC):

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog."""

    def exists(self, book_id: str) -> bool:
        return self.get_by_id(book_id) is not None


class WritableBookCatalog(BookCatalog):
    """A catalog the CLI can seed.  The warehouse itself never writes."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Persist a new or updated book."""
