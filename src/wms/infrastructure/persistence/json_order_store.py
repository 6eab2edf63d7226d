"""JSON-file-backed implementation of OrderStore."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from wms.domain.exceptions import UnknownOrder
from wms.domain.model.order import Order, OrderStatus, new_order_id
from wms.domain.repository.order_store import OrderStore
from wms.infrastructure.persistence.json_file import JsonFile
from wms.infrastructure.persistence.record_locks import RecordLocks


class JsonOrderStore(OrderStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        self._orders = RecordLocks()

    # --- OrderStore interface -------------------------------------------------

    def create(self, book_ids: Sequence[str]) -> str:
        with self._file.locked():
            orders = self._file.load()
            taken = {raw["order_id"] for raw in orders}
            order_id = new_order_id()
            while order_id in taken:
                order_id = new_order_id()

            order = Order.create(book_ids, order_id=order_id)
            orders.append(self._to_raw(order))
            self._file.persist(orders)
        return order.id

    def get(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_id"] == order_id:
                return self._to_domain(raw)
        return None

    def list(self) -> Iterator[Order]:
        for raw in self._file.load():
            yield self._to_domain(raw)

    def mark_fulfilled(self, order_id: str) -> None:
        with self._orders.hold([order_id]), self._file.locked():
            orders = self._file.load()
            for i, raw in enumerate(orders):
                if raw["order_id"] == order_id:
                    order = self._to_domain(raw)
                    order.mark_fulfilled()
                    orders[i] = self._to_raw(order)
                    break
            else:
                raise UnknownOrder(order_id)
            self._file.persist(orders)

    @contextmanager
    def locked(self, order_id: str) -> Iterator[None]:
        with self._orders.hold([order_id]), self._file.locked():
            yield

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "order_id": order.id,
            "requested_counts": dict(order.requested_counts),
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["order_id"],
            requested_counts=raw["requested_counts"],
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
