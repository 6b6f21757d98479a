"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import abstractmethod

from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.repository.base import Repository


class OrderRepository(Repository[Order]):

    @abstractmethod
    def update_if_status(self, order_id: str, expected: OrderStatus, order: Order) -> bool:
        """Replace the order's mutable fields only if its stored status is *expected*.

        The status check and the write happen in one store operation.
        Returns False when no order with that id and status matched.
        """
