"""Mapping between domain objects and stored documents.

Both stores keep the same document shape.  Money is stored as a decimal
string plus currency so no precision is lost; timestamps are datetimes
here and each store decides how to encode them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money, Quantity

# Fields an update may overwrite; ``id`` and ``created_at`` are fixed at creation.
PRODUCT_MUTABLE_FIELDS = ("name", "price", "currency", "stock", "category", "updated_at")
ORDER_MUTABLE_FIELDS = (
    "product_id",
    "quantity",
    "total_price",
    "currency",
    "status",
    "updated_at",
)


def product_to_document(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": str(product.price.amount),
        "currency": product.price.currency,
        "stock": product.stock,
        "category": product.category,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def product_from_document(doc: dict[str, Any]) -> Product:
    return Product(
        id=doc["id"],
        name=doc["name"],
        price=Money(Decimal(doc["price"]), doc.get("currency", "USD")),
        stock=int(doc["stock"]),
        category=doc.get("category", ""),
        created_at=parse_datetime(doc.get("created_at")),
        updated_at=parse_datetime(doc.get("updated_at")),
    )


def order_to_document(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "product_id": order.product_id,
        "quantity": order.quantity.value,
        "total_price": str(order.total_price.amount),
        "currency": order.total_price.currency,
        "status": order.status.value,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def order_from_document(doc: dict[str, Any]) -> Order:
    return Order(
        id=doc["id"],
        product_id=doc["product_id"],
        quantity=Quantity(int(doc["quantity"])),
        total_price=Money(Decimal(doc["total_price"]), doc.get("currency", "USD")),
        status=OrderStatus.parse(doc["status"]),
        created_at=parse_datetime(doc.get("created_at")),
        updated_at=parse_datetime(doc.get("updated_at")),
    )


def mutable_fields(doc: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    return {name: doc[name] for name in fields}


def parse_datetime(value: datetime | str | None) -> datetime | None:
    """Accept ISO strings (JSON store) or datetimes (MongoDB); naive means UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
