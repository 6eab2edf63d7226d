"""JSON-file-backed implementation of BookCatalog.

Read-only as far as the warehouse is concerned; ``save`` exists so the
CLI can seed the catalog.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from wms.domain.model.book import Book
from wms.domain.model.value_objects import Money
from wms.domain.repository.book_catalog import WritableBookCatalog
from wms.infrastructure.persistence.json_file import JsonFile


class JsonBookCatalog(WritableBookCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- BookCatalog interface ------------------------------------------------

    def get_by_id(self, book_id: str) -> Book | None:
        return self._load().get(book_id)

    def list_all(self) -> list[Book]:
        return list(self._load().values())

    def save(self, book: Book) -> None:
        with self._file.locked():
            books = self._load()
            books[book.id] = book
            self._persist(books)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Book]:
        return {
            item["id"]: Book(
                id=item["id"],
                name=item["name"],
                author=item["author"],
                price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                description=item.get("description", ""),
                image=item.get("image", ""),
            )
            for item in self._file.load()
        }

    def _persist(self, books: dict[str, Book]) -> None:
        self._file.persist([
            {
                "id": b.id,
                "name": b.name,
                "author": b.author,
                "price": str(b.price.amount),
                "currency": b.price.currency,
                "description": b.description,
                "image": b.image,
            }
            for b in books.values()
        ])
