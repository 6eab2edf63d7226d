"""Data Transfer Objects — plain containers that cross layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.model.book import Book


@dataclass(frozen=True)
class BookStock:
    """Output: a catalog book paired with its copies across all shelves."""

    book: Book
    stock: int
