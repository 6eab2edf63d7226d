"""Application service: the warehouse.

Validates every request against the catalog and the current stock
before handing it to the shelf ledger and the order store.  All
business-rule failures are raised here, before anything is written.

Fulfilling an order is the one place where two requests can race for
the same copies.  The stock check and the decrement therefore run while
the order lock and the ledger locks for every affected shelf are held,
so a second fulfillment cannot see stock already promised to the first.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import structlog

from wms.application.dto import BookStock
from wms.domain.exceptions import (
    InsufficientStock,
    OrderAlreadyFulfilled,
    UnknownBook,
    UnknownOrder,
    ValidationError,
)
from wms.domain.model.order import Order
from wms.domain.model.shelf import FulfillmentLine, ShelfKey, ShelfRecord, demand_by_shelf
from wms.domain.model.value_objects import Quantity
from wms.domain.repository.book_catalog import BookCatalog
from wms.domain.repository.order_store import OrderStore
from wms.domain.repository.shelf_ledger import ShelfLedger
from wms.domain.service.stock_aggregator import StockAggregator

logger = structlog.get_logger(__name__)


class WarehouseService:

    def __init__(
        self,
        catalog: BookCatalog,
        shelf_ledger: ShelfLedger,
        order_store: OrderStore,
        stock: StockAggregator | None = None,
    ) -> None:
        self._catalog = catalog
        self._shelf_ledger = shelf_ledger
        self._order_store = order_store
        self._stock = stock or StockAggregator(shelf_ledger)

    # --- Shelves --------------------------------------------------------------

    def place_on_shelf(self, book_id: str, quantity: int, shelf_id: str) -> None:
        """Put *quantity* copies of a catalog book on a shelf."""
        self._require_book(book_id)
        qty = Quantity(quantity)

        self._shelf_ledger.place(book_id, shelf_id, qty.value)
        logger.info("Books placed on shelf", book_id=book_id, shelf_id=shelf_id, quantity=qty.value)

    def locate(self, book_id: str) -> list[ShelfRecord]:
        """Where the book is shelved.

        Unlike the ledger itself, this refuses books the catalog does not
        know about.
        """
        self._require_book(book_id)
        return self._shelf_ledger.locate(book_id)

    # --- Orders ---------------------------------------------------------------

    def order(self, book_ids: Sequence[str]) -> str:
        """Create a pending order; *book_ids* may repeat to ask for several copies."""
        if not book_ids:
            raise ValidationError("Order must contain at least one book")
        for book_id in dict.fromkeys(book_ids):
            self._require_book(book_id)

        order_id = self._order_store.create(book_ids)
        logger.info("Order created", order_id=order_id, books=len(book_ids))
        return order_id

    def list_orders(self) -> Iterator[Order]:
        return self._order_store.list()

    def get_order(self, order_id: str) -> Order:
        order = self._order_store.get(order_id)
        if order is None:
            raise UnknownOrder(order_id)
        return order

    def fulfil(self, order_id: str, lines: Sequence[FulfillmentLine]) -> None:
        """Take the listed copies off their shelves and close the order.

        Checks, in order: the order exists, every line names a catalog
        book, every shelf holds enough copies.  Only then are the shelves
        debited (all lines or none) and the order marked fulfilled.  If the
        order cannot be marked, the debit is reversed before the error
        propagates.

        The lines are trusted as given; they need not match the order's
        requested counts.
        """
        self.get_order(order_id)
        if not lines:
            raise ValidationError("Must specify at least one line to fulfil")
        for book_id in dict.fromkeys(line.book_id for line in lines):
            self._require_book(book_id)

        demand = demand_by_shelf(lines)
        with self._order_store.locked(order_id), self._shelf_ledger.locked(demand):
            # Re-read under the lock: a racing fulfillment may have won.
            if not self.get_order(order_id).is_pending:
                logger.info("Fulfillment rejected", order_id=order_id, reason="already fulfilled")
                raise OrderAlreadyFulfilled(order_id)

            self._check_stock(order_id, demand)
            self._shelf_ledger.try_decrement(lines)
            try:
                self._order_store.mark_fulfilled(order_id)
            except Exception:
                # Still pending, so the copies go back on their shelves.
                logger.error("Order status not saved, restocking", order_id=order_id)
                self._restock(demand)
                raise

        logger.info("Order fulfilled", order_id=order_id, lines=len(lines))

    # --- Stock reports --------------------------------------------------------

    def book_with_stock(self, book_id: str) -> BookStock | None:
        book = self._catalog.get_by_id(book_id)
        if book is None:
            return None
        return BookStock(book=book, stock=self._stock.total_for(book_id))

    def all_books_with_stock(self) -> list[BookStock]:
        books = self._catalog.list_all()
        totals = self._stock.totals_for(book.id for book in books)
        return [BookStock(book=book, stock=totals.get(book.id, 0)) for book in books]

    # --- Internal helpers -----------------------------------------------------

    def _require_book(self, book_id: str) -> None:
        if not self._catalog.exists(book_id):
            logger.info("Unknown book rejected", book_id=book_id)
            raise UnknownBook(book_id)

    def _check_stock(self, order_id: str, demand: dict[ShelfKey, int]) -> None:
        for (book_id, shelf_id), qty in demand.items():
            available = self._shelf_count(book_id, shelf_id)
            if available < qty:
                logger.info(
                    "Fulfillment rejected",
                    order_id=order_id,
                    book_id=book_id,
                    shelf_id=shelf_id,
                    requested=qty,
                    available=available,
                )
                raise InsufficientStock(book_id, shelf_id, requested=qty, available=available)

    def _restock(self, demand: dict[ShelfKey, int]) -> None:
        for (book_id, shelf_id), qty in demand.items():
            self._shelf_ledger.place(book_id, shelf_id, qty)

    def _shelf_count(self, book_id: str, shelf_id: str) -> int:
        for record in self._shelf_ledger.locate(book_id):
            if record.shelf_id == shelf_id:
                return record.count
        return 0
