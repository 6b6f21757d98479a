"""MongoDB-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from stockroom.domain.exceptions import AlreadyExistsError, EntityNotFoundError, StorageError
from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.infrastructure.persistence.documents import (
    ORDER_MUTABLE_FIELDS,
    mutable_fields,
    order_from_document,
    order_to_document,
)

_PROJECTION = {"_id": 0}


class MongoOrderRepository(OrderRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        try:
            self._collection.create_index("id", unique=True)
        except PyMongoError as exc:
            raise StorageError(f"Cannot create order indexes: {exc}") from exc

    def create(self, order: Order) -> Order:
        if order.id is None:
            order.id = str(uuid.uuid4())
        try:
            self._collection.insert_one(order_to_document(order))
        except DuplicateKeyError as exc:
            raise AlreadyExistsError(f"Order with ID '{order.id}' already exists") from exc
        except PyMongoError as exc:
            raise StorageError(f"Failed to insert order: {exc}") from exc
        return order

    def find_all(self) -> list[Order]:
        try:
            return [order_from_document(doc) for doc in self._collection.find({}, _PROJECTION)]
        except PyMongoError as exc:
            raise StorageError(f"Failed to list orders: {exc}") from exc

    def find_by_id(self, order_id: str) -> Order:
        try:
            doc = self._collection.find_one({"id": order_id}, _PROJECTION)
        except PyMongoError as exc:
            raise StorageError(f"Failed to load order '{order_id}': {exc}") from exc
        if doc is None:
            raise EntityNotFoundError(f"Order with ID '{order_id}' not found")
        return order_from_document(doc)

    def update(self, order_id: str, order: Order) -> bool:
        fields = mutable_fields(order_to_document(order), ORDER_MUTABLE_FIELDS)
        try:
            result = self._collection.update_one({"id": order_id}, {"$set": fields})
        except PyMongoError as exc:
            raise StorageError(f"Failed to update order '{order_id}': {exc}") from exc
        return result.matched_count > 0

    def update_if_status(self, order_id: str, expected: OrderStatus, order: Order) -> bool:
        fields = mutable_fields(order_to_document(order), ORDER_MUTABLE_FIELDS)
        try:
            result = self._collection.update_one(
                {"id": order_id, "status": expected.value}, {"$set": fields}
            )
        except PyMongoError as exc:
            raise StorageError(f"Failed to update order '{order_id}': {exc}") from exc
        return result.matched_count > 0

    def delete(self, order_id: str) -> bool:
        try:
            result = self._collection.delete_one({"id": order_id})
        except PyMongoError as exc:
            raise StorageError(f"Failed to delete order '{order_id}': {exc}") from exc
        return result.deleted_count > 0
