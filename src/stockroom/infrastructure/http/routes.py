"""FastAPI routes for products and orders.

Route functions are plain ``def`` so FastAPI runs them in its threadpool;
concurrent order placements therefore really do overlap, and the
repository's conditional decrement is what keeps stock consistent.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money, Quantity
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.http.schemas import (
    MessageResponse,
    OrderCreateRequest,
    OrderResponse,
    OrderUpdateRequest,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)


def get_services(request: Request) -> Services:
    return request.app.state.services


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
def create_product(
    body: ProductCreateRequest, services: Services = Depends(get_services)
) -> ProductResponse:
    product = Product.create(
        name=body.name,
        price=Money.of(body.price),
        stock=body.stock,
        category=body.category,
        product_id=body.id,
    )
    return ProductResponse.from_domain(services.products.create_product(product))


@product_router.get("", response_model=list[ProductResponse])
def list_products(services: Services = Depends(get_services)) -> list[ProductResponse]:
    return [ProductResponse.from_domain(p) for p in services.products.get_all_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, services: Services = Depends(get_services)) -> ProductResponse:
    return ProductResponse.from_domain(services.products.get_product_by_id(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    services: Services = Depends(get_services),
) -> ProductResponse:
    product = Product.create(
        name=body.name,
        price=Money.of(body.price),
        stock=body.stock,
        category=body.category,
    )
    return ProductResponse.from_domain(services.products.update_product(product_id, product))


@product_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, services: Services = Depends(get_services)) -> MessageResponse:
    services.products.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
def create_order(
    body: OrderCreateRequest, services: Services = Depends(get_services)
) -> OrderResponse:
    order = services.orders.create_order(product_id=body.product_id, quantity=body.quantity)
    return OrderResponse.from_domain(order)


@order_router.get("", response_model=list[OrderResponse])
def list_orders(services: Services = Depends(get_services)) -> list[OrderResponse]:
    return [OrderResponse.from_domain(o) for o in services.orders.get_all_orders()]


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, services: Services = Depends(get_services)) -> OrderResponse:
    return OrderResponse.from_domain(services.orders.get_order_by_id(order_id))


@order_router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: OrderUpdateRequest,
    services: Services = Depends(get_services),
) -> OrderResponse:
    order = Order(
        id=order_id,
        product_id=body.product_id,
        quantity=Quantity(body.quantity),
        total_price=Money.of(body.total_price),
        status=OrderStatus.parse(body.status),
    )
    return OrderResponse.from_domain(services.orders.update_order(order_id, order))


@order_router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(order_id: str, services: Services = Depends(get_services)) -> MessageResponse:
    services.orders.delete_order(order_id)
    return MessageResponse(message="Order deleted successfully")
