"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownBook(EntityNotFoundError):

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book with ID {book_id} does not exist")
        self.book_id = book_id


class UnknownOrder(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order with ID {order_id} does not exist")
        self.order_id = order_id


class InsufficientStock(ValidationError):
    """A shelf holds fewer copies of a book than a fulfillment asks for."""

    def __init__(
        self,
        book_id: str,
        shelf_id: str,
        requested: int | None = None,
        available: int | None = None,
    ) -> None:
        message = f"Insufficient stock for book {book_id} on shelf {shelf_id}"
        if requested is not None and available is not None:
            message += f" (need {requested}, have {available})"
        super().__init__(message)
        self.book_id = book_id
        self.shelf_id = shelf_id
        self.requested = requested
        self.available = available


class OrderAlreadyFulfilled(ValidationError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} already fulfilled")
        self.order_id = order_id
