"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager

from wms.domain.model.order import Order


class OrderStore(ABC):

    @abstractmethod
    def create(self, book_ids: Sequence[str]) -> str:
        """Persist a new pending order tallied from *book_ids*; return its ID."""

    @abstractmethod
    def get(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list(self) -> Iterator[Order]:
        """Yield every order, in no particular order."""

    @abstractmethod
    def mark_fulfilled(self, order_id: str) -> None:
        """Flip a pending order to fulfilled.

        Raises UnknownOrder if it does not exist and OrderAlreadyFulfilled
        if it is no longer pending.
        """

    @abstractmethod
    def locked(self, order_id: str) -> AbstractContextManager[None]:
        """Hold the order's (reentrant) lock for the ``with`` block."""
