"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.infrastructure.persistence.documents import (
    ORDER_MUTABLE_FIELDS,
    mutable_fields,
    order_from_document,
    order_to_document,
)
from stockroom.infrastructure.persistence.json_collection import JsonCollection


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    def create(self, order: Order) -> Order:
        if order.id is None:
            order.id = str(uuid.uuid4())
        self._collection.insert(order_to_document(order))
        return order

    def find_all(self) -> list[Order]:
        return [order_from_document(raw) for raw in self._collection.load()]

    def find_by_id(self, order_id: str) -> Order:
        raw = self._collection.find(order_id)
        if raw is None:
            raise EntityNotFoundError(f"Order with ID '{order_id}' not found")
        return order_from_document(raw)

    def update(self, order_id: str, order: Order) -> bool:
        fields = mutable_fields(order_to_document(order), ORDER_MUTABLE_FIELDS)
        return self._collection.set_fields(order_id, fields)

    def update_if_status(self, order_id: str, expected: OrderStatus, order: Order) -> bool:
        fields = mutable_fields(order_to_document(order), ORDER_MUTABLE_FIELDS)
        return self._collection.set_fields(order_id, fields, match={"status": expected.value})

    def delete(self, order_id: str) -> bool:
        return self._collection.remove(order_id)
