"""Book — an entry in the catalog.

The catalog is owned elsewhere; the warehouse only asks whether a book
exists and reads it back for stock reports.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ValidationError
from wms.domain.model.value_objects import Money


@dataclass(frozen=True)
class Book:

    id: str
    name: str
    author: str
    price: Money
    description: str = ""
    image: str = ""

    @staticmethod
    def create(
        book_id: str,
        name: str,
        author: str,
        price: Money,
        description: str = "",
        image: str = "",
    ) -> Book:
        """Create a new catalog entry, enforcing the listing rules."""
        if not name or not name.strip():
            raise ValidationError("Book name is required")
        if not author or not author.strip():
            raise ValidationError("Book author is required")
        if price.amount <= 0:
            raise ValidationError("Book price must be greater than zero")
        return Book(
            id=book_id,
            name=name.strip(),
            author=author.strip(),
            price=price,
            description=description,
            image=image,
        )
