"""Application service: Add Book use case (catalog seeding)."""

from __future__ import annotations

import structlog

from wms.domain.model.book import Book
from wms.domain.model.value_objects import Money
from wms.domain.repository.book_catalog import WritableBookCatalog

logger = structlog.get_logger(__name__)


class AddBookHandler:

    def __init__(self, catalog: WritableBookCatalog) -> None:
        self._catalog = catalog

    def handle(
        self,
        name: str,
        author: str,
        price: str,
        description: str = "",
        image: str = "",
    ) -> Book:
        """Add a new book to the catalog."""
        # Auto-assign ID based on existing books
        all_books = self._catalog.list_all()
        numeric_ids = [int(b.id) for b in all_books if b.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        book = Book.create(
            book_id=next_id,
            name=name,
            author=author,
            price=Money.of(price),
            description=description,
            image=image,
        )
        self._catalog.save(book)
        logger.info("Book added to catalog", book_id=book.id, name=book.name)
        return book
