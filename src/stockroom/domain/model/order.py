"""Order aggregate.

An order references one product by id and locks in the total price at
placement time.  Later price changes on the product never reprice an
existing order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from stockroom.domain.exceptions import InvalidStatusTransitionError, ValidationError
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @staticmethod
    def parse(raw: str | OrderStatus) -> OrderStatus:
        """Accept either the enum or its value, case-insensitively."""
        if isinstance(raw, OrderStatus):
            return raw
        for status in OrderStatus:
            if status.value.lower() == str(raw).strip().lower():
                return status
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status {raw!r} (expected one of {allowed})")


# Staying in the same status is always allowed so other fields can be edited.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PENDING, OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.CANCELLED: frozenset({OrderStatus.CANCELLED}),
}


@dataclass
class Order:
    """Aggregate root for a single-product order.

    Use ``Order.place()`` for new orders.  The plain ``__init__`` is left
    unvalidated so repositories can reconstitute stored documents.
    """

    id: str | None
    product_id: str
    quantity: Quantity
    total_price: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @staticmethod
    def place(product: Product, quantity: Quantity, now: datetime) -> Order:
        """Price a new order against *product* as it is right now."""
        if product.id is None:
            raise ValidationError("Cannot order a product that has not been stored")
        return Order(
            id=None,
            product_id=product.id,
            quantity=quantity,
            total_price=product.price * quantity.value,  # price snapshot
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def can_transition_to(self, status: OrderStatus) -> bool:
        return status in _TRANSITIONS[self.status]

    def check_transition(self, status: OrderStatus) -> None:
        if not self.can_transition_to(status):
            raise InvalidStatusTransitionError(
                f"Cannot move order {self.id} from {self.status.value} to {status.value}"
            )
