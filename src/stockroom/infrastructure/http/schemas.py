"""Pydantic request/response schemas for the HTTP API.

These are the external JSON contracts; they are converted to and from the
domain dataclasses at the route boundary.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stockroom.domain.model.order import Order
from stockroom.domain.model.product import Product


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ProductUpdateRequest(BaseModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)
    category: str = ""


class ProductCreateRequest(ProductUpdateRequest):
    id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Widget", "price": 10.0, "stock": 5, "category": "tools"}
            ]
        }
    }


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    stock: int
    category: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, product: Product) -> ProductResponse:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price.as_float(),
            stock=product.stock,
            category=product.category,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderCreateRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class OrderUpdateRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    total_price: Decimal = Field(ge=0)
    status: str


class OrderResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    total_price: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: Order) -> OrderResponse:
        return cls(
            id=order.id,
            product_id=order.product_id,
            quantity=order.quantity.value,
            total_price=order.total_price.as_float(),
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class MessageResponse(BaseModel):
    message: str
