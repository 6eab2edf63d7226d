"""Abstract repository for shelf stock.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from contextlib import AbstractContextManager

from wms.domain.model.shelf import FulfillmentLine, ShelfKey, ShelfRecord


class ShelfLedger(ABC):

    @abstractmethod
    def place(self, book_id: str, shelf_id: str, quantity: int) -> None:
        """Add *quantity* copies to the shelf, creating the record if needed."""

    @abstractmethod
    def locate(self, book_id: str) -> list[ShelfRecord]:
        """Return every shelf record for the book (empty list if none).

        Does not check the catalog; it reports whatever the ledger holds.
        """

    @abstractmethod
    def try_decrement(self, lines: Sequence[FulfillmentLine]) -> None:
        """Debit every line as one all-or-nothing batch.

        All lines are checked before any record is written.  Raises
        InsufficientStock for the first (book, shelf) that cannot cover
        its combined demand; in that case no count changes.
        """

    @abstractmethod
    def locked(self, keys: Iterable[ShelfKey]) -> AbstractContextManager[None]:
        """Hold the locks covering *keys* for the ``with`` block.

        ``place`` and ``try_decrement`` take the same (reentrant) locks,
        so a caller can read counts and decrement them without another
        writer slipping in between.
        """
