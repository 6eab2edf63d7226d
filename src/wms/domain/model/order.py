"""Order aggregate — a request for copies of books.

An order only records *what was asked for* (a tally per book) and whether
it has been fulfilled.  Which shelves the copies came from is decided by
whoever fulfills it; the order does not track remaining quantities.
"""

from __future__ import annotations

import secrets
import string
import time
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType

from wms.domain.exceptions import OrderAlreadyFulfilled, ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"


_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


def new_order_id() -> str:
    """Generate an id shaped like ``order_<epoch-millis>_<base36 suffix>``."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"order_{millis}_{suffix}"


@dataclass
class Order:
    """Aggregate root for book orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is kept simple so a store can reconstitute persisted orders without
    re-validating them.
    """

    id: str
    requested_counts: Mapping[str, int]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # The original tally is never edited, only read.
        self.requested_counts = MappingProxyType(dict(self.requested_counts))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(book_ids: Iterable[str], order_id: str | None = None) -> Order:
        """Tally *book_ids* (duplicates counted) into a new pending order."""
        tally = Counter(book_ids)
        if not tally:
            raise ValidationError("Order must contain at least one book")
        return Order(id=order_id or new_order_id(), requested_counts=dict(tally))

    # --- State transitions ----------------------------------------------------

    def mark_fulfilled(self) -> None:
        """Transition PENDING -> FULFILLED.  Happens exactly once."""
        if self.status != OrderStatus.PENDING:
            raise OrderAlreadyFulfilled(self.id)
        self.status = OrderStatus.FULFILLED

    # --- Computed properties --------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    @property
    def total_books(self) -> int:
        return sum(self.requested_counts.values())
