"""Domain service: Stock Aggregator.

A book's stock is the sum of its counts across every shelf.  Nothing
stores that total; it is always derived from the shelf ledger.
"""

from __future__ import annotations

from collections.abc import Iterable

from wms.domain.repository.shelf_ledger import ShelfLedger


class StockAggregator:

    def __init__(self, shelf_ledger: ShelfLedger) -> None:
        self._shelf_ledger = shelf_ledger

    def total_for(self, book_id: str) -> int:
        """Total copies of the book in the warehouse, 0 if it is untracked."""
        return sum(record.count for record in self._shelf_ledger.locate(book_id))

    def totals_for(self, book_ids: Iterable[str]) -> dict[str, int]:
        """Totals per book.  Repeated ids collapse into a single entry."""
        return {book_id: self.total_for(book_id) for book_id in dict.fromkeys(book_ids)}
