"""Shelf stock — how many copies of a book sit on one shelf.

There is one ShelfRecord per (book, shelf) pair.  Records are created by
the first placement and are never deleted; a shelf that has been emptied
simply settles at zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from wms.domain.exceptions import InsufficientStock, ValidationError
from wms.domain.model.value_objects import Quantity

ShelfKey = tuple[str, str]


@dataclass
class ShelfRecord:
    """Stock of one book on one shelf.

    Invariants:
    - ``count`` is never negative
    """

    book_id: str
    shelf_id: str
    count: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValidationError(
                f"Shelf count cannot be negative, got {self.count}"
            )

    @property
    def key(self) -> ShelfKey:
        return (self.book_id, self.shelf_id)

    def add(self, quantity: int) -> None:
        """Put more copies on the shelf."""
        self.count += Quantity(quantity).value

    def remove(self, quantity: int) -> None:
        """Take copies off the shelf.

        Raises InsufficientStock if the shelf holds fewer than *quantity*.
        """
        qty = Quantity(quantity).value
        if qty > self.count:
            raise InsufficientStock(
                self.book_id, self.shelf_id, requested=qty, available=self.count
            )
        self.count -= qty


@dataclass(frozen=True)
class FulfillmentLine:
    """A single shelf debit requested while fulfilling an order."""

    book_id: str
    shelf_id: str
    number_of_books: int

    def __post_init__(self) -> None:
        Quantity(self.number_of_books)

    @property
    def key(self) -> ShelfKey:
        return (self.book_id, self.shelf_id)


def demand_by_shelf(lines: Iterable[FulfillmentLine]) -> dict[ShelfKey, int]:
    """Sum the requested copies per (book, shelf), keeping first-seen order.

    Two lines debiting the same shelf must be checked against their
    combined amount, not one at a time.
    """
    demand: dict[ShelfKey, int] = {}
    for line in lines:
        demand[line.key] = demand.get(line.key, 0) + line.number_of_books
    return demand
