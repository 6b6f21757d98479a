"""Product aggregate.

Products live independently of orders: they are created, repriced,
restocked and deleted on their own. Orders only hold a reference to the
product id, never the product itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from stockroom.domain.exceptions import InsufficientStockError, ValidationError
from stockroom.domain.model.value_objects import Money


@dataclass
class Product:
    """A catalogue product with its available stock.

    Invariant: ``stock`` is never negative.  The plain ``__init__`` does not
    validate so repositories can rebuild stored documents as-is; new
    products go through ``Product.create()``.
    """

    id: str | None
    name: str
    price: Money
    stock: int
    category: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int,
        category: str = "",
        product_id: str | None = None,
    ) -> Product:
        """Build a new product, enforcing the catalogue rules."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_stock(stock)
        if product_id is not None and not product_id.strip():
            raise ValidationError("Product ID cannot be blank")
        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            stock=stock,
            category=(category or "").strip(),
        )

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock

    def remove_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError when fewer units are available.
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock})"
            )
        self.stock -= quantity

    def touch(self, now: datetime, *, created: bool = False) -> None:
        if created:
            self.created_at = now
        self.updated_at = now


def _check_stock(stock: int) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError(f"Stock must be an integer, got {type(stock).__name__}")
    if stock < 0:
        raise ValidationError("Stock cannot be negative")
