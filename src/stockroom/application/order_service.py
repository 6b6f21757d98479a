"""Application service: order lifecycle and order placement.

Placing an order is the only operation that touches both collections:

1. Resolve the product (fail with InvalidProductError if it is gone).
2. Fail fast with InsufficientStockError if the stock we just read is too low.
3. Price the order against the product as read.
4. Write the order.
5. Take the units out of stock with the repository's conditional
   decrement, which re-checks ``stock >= quantity`` inside the store.

Step 2 only saves a round trip; step 5 is what prevents two concurrent
orders from overselling.  If step 5 does not go through, the order written
in step 4 is deleted again before the error is raised.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidProductError,
    InvalidStatusTransitionError,
    OrderPersistenceError,
    StockUpdateError,
    StorageError,
)
from stockroom.domain.model.order import Order
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Quantity
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class OrderService:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def create_order(self, product_id: str, quantity: int) -> Order:
        """Place an order for *quantity* units of *product_id*."""
        log = logger.bind(product_id=product_id, quantity=quantity)
        log.info("Creating order")

        qty = Quantity(quantity)
        product = self._load_product(product_id)

        if not product.has_stock_for(qty.value):
            log.warning("Insufficient stock", stock=product.stock)
            raise _insufficient(product, qty.value)

        order = Order.place(product, qty, datetime.now(timezone.utc))

        try:
            created = self._order_repo.create(order)
        except StorageError as exc:
            log.error("Failed to persist order", exc_info=True)
            raise OrderPersistenceError(f"Failed to create order: {exc}") from exc

        log = log.bind(order_id=created.id)
        try:
            updated = self._product_repo.decrement_stock(product_id, qty.value)
        except StorageError as exc:
            log.error("Failed to update product stock", exc_info=True)
            self._roll_back(created.id)
            raise StockUpdateError(f"Failed to update product stock: {exc}") from exc

        if updated is None:
            # Another order took the stock (or the product was deleted)
            # between our read and the decrement.
            log.warning("Stock changed before decrement")
            self._roll_back(created.id)
            current = self._load_product(product_id)
            raise _insufficient(current, qty.value)

        log.info("Order created", stock_left=updated.stock)
        return created

    def get_all_orders(self) -> list[Order]:
        logger.info("Fetching all orders")
        return self._order_repo.find_all()

    def get_order_by_id(self, order_id: str) -> Order:
        logger.info("Fetching order", order_id=order_id)
        return self._order_repo.find_by_id(order_id)

    def update_order(self, order_id: str, order: Order) -> Order:
        """Replace an order's fields as supplied by the caller.

        The total price is not recomputed and stock is not re-checked; only
        the status change is validated against the order's current status.
        """
        logger.info("Updating order", order_id=order_id, status=order.status.value)

        current = self._order_repo.find_by_id(order_id)
        current.check_transition(order.status)

        order.id = order_id
        order.created_at = current.created_at
        order.updated_at = datetime.now(timezone.utc)
        if not self._order_repo.update_if_status(order_id, current.status, order):
            # Someone else changed the order since we read it; judge the
            # transition again against what is stored now.
            latest = self._order_repo.find_by_id(order_id)
            logger.warning(
                "Order changed during update",
                order_id=order_id,
                expected=current.status.value,
                found=latest.status.value,
            )
            raise InvalidStatusTransitionError(
                f"Cannot move order {order_id} from {latest.status.value} to "
                f"{order.status.value}: status changed concurrently"
            )

        logger.info("Order updated", order_id=order_id)
        return order

    def delete_order(self, order_id: str) -> None:
        """Delete an order.  Stock taken by the order is not given back."""
        logger.info("Deleting order", order_id=order_id)
        removed = self._order_repo.delete(order_id)
        logger.info("Order deleted", order_id=order_id, removed=removed)

    # --- Internal helpers -----------------------------------------------------

    def _load_product(self, product_id: str) -> Product:
        try:
            return self._product_repo.find_by_id(product_id)
        except EntityNotFoundError as exc:
            logger.warning("Order references unknown product", product_id=product_id)
            raise InvalidProductError(f"Invalid product ID '{product_id}'") from exc

    def _roll_back(self, order_id: str) -> None:
        """Delete an order whose stock could not be taken.

        If this fails too the order is left behind without stock reserved;
        the orphan is logged and the caller's original error still wins.
        """
        try:
            self._order_repo.delete(order_id)
        except StorageError:
            logger.error(
                "Failed to roll back order; order exists without stock reserved",
                order_id=order_id,
                exc_info=True,
            )


def _insufficient(product: Product, quantity: int) -> InsufficientStockError:
    return InsufficientStockError(
        f"Insufficient stock for {product.name} (need {quantity}, have {product.stock})"
    )
