"""JSON-file-backed implementation of ShelfLedger."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from wms.domain.exceptions import InsufficientStock
from wms.domain.model.shelf import (
    FulfillmentLine,
    ShelfKey,
    ShelfRecord,
    demand_by_shelf,
)
from wms.domain.model.value_objects import Quantity
from wms.domain.repository.shelf_ledger import ShelfLedger
from wms.infrastructure.persistence.json_file import JsonFile
from wms.infrastructure.persistence.record_locks import RecordLocks


class JsonShelfLedger(ShelfLedger):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._records = RecordLocks()

    # --- ShelfLedger interface ------------------------------------------------

    def place(self, book_id: str, shelf_id: str, quantity: int) -> None:
        qty = Quantity(quantity).value
        with self._records.hold([(book_id, shelf_id)]), self._file.locked():
            records = self._load()
            record = records.get((book_id, shelf_id))
            if record is None:
                records[(book_id, shelf_id)] = ShelfRecord(book_id, shelf_id, qty)
            else:
                record.add(qty)
            self._persist(records)

    def locate(self, book_id: str) -> list[ShelfRecord]:
        with self._file.locked():
            return [r for r in self._load().values() if r.book_id == book_id]

    def try_decrement(self, lines: Sequence[FulfillmentLine]) -> None:
        demand = demand_by_shelf(lines)
        with self._records.hold(demand), self._file.locked():
            records = self._load()

            # Phase 1: every shelf must cover its combined demand
            for (book_id, shelf_id), qty in demand.items():
                record = records.get((book_id, shelf_id))
                available = record.count if record is not None else 0
                if qty > available:
                    raise InsufficientStock(
                        book_id, shelf_id, requested=qty, available=available
                    )

            # Phase 2: apply and write the batch once
            for key, qty in demand.items():
                records[key].remove(qty)
            self._persist(records)

    @contextmanager
    def locked(self, keys: Iterable[ShelfKey]) -> Iterator[None]:
        # The whole ledger is one file, so the record locks only order
        # threads of this process; the file lock covers everyone else.
        with self._records.hold(keys), self._file.locked():
            yield

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: ShelfRecord) -> dict:
        return {
            "book_id": record.book_id,
            "shelf_id": record.shelf_id,
            "count": record.count,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ShelfRecord:
        return ShelfRecord(
            book_id=raw["book_id"],
            shelf_id=raw["shelf_id"],
            count=raw["count"],
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[ShelfKey, ShelfRecord]:
        records = (self._to_domain(raw) for raw in self._file.load())
        return {record.key: record for record in records}

    def _persist(self, records: dict[ShelfKey, ShelfRecord]) -> None:
        self._file.persist([self._to_raw(r) for r in records.values()])
