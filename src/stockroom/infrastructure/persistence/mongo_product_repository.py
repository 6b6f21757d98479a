"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from stockroom.domain.exceptions import AlreadyExistsError, EntityNotFoundError, StorageError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.documents import (
    PRODUCT_MUTABLE_FIELDS,
    mutable_fields,
    product_from_document,
    product_to_document,
)

# Mongo's own ``_id`` never leaves the repository.
_PROJECTION = {"_id": 0}


class MongoProductRepository(ProductRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        try:
            self._collection.create_index("id", unique=True)
        except PyMongoError as exc:
            raise StorageError(f"Cannot create product indexes: {exc}") from exc

    # --- ProductRepository interface ------------------------------------------

    def create(self, product: Product) -> Product:
        if product.id is None:
            product.id = str(uuid.uuid4())
        try:
            self._collection.insert_one(product_to_document(product))
        except DuplicateKeyError as exc:
            raise AlreadyExistsError(f"Product with ID '{product.id}' already exists") from exc
        except PyMongoError as exc:
            raise StorageError(f"Failed to insert product: {exc}") from exc
        return product

    def find_all(self) -> list[Product]:
        try:
            return [
                product_from_document(doc)
                for doc in self._collection.find({}, _PROJECTION)
            ]
        except PyMongoError as exc:
            raise StorageError(f"Failed to list products: {exc}") from exc

    def find_by_id(self, product_id: str) -> Product:
        try:
            doc = self._collection.find_one({"id": product_id}, _PROJECTION)
        except PyMongoError as exc:
            raise StorageError(f"Failed to load product '{product_id}': {exc}") from exc
        if doc is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_from_document(doc)

    def update(self, product_id: str, product: Product) -> bool:
        fields = mutable_fields(product_to_document(product), PRODUCT_MUTABLE_FIELDS)
        try:
            result = self._collection.update_one({"id": product_id}, {"$set": fields})
        except PyMongoError as exc:
            raise StorageError(f"Failed to update product '{product_id}': {exc}") from exc
        return result.matched_count > 0

    def delete(self, product_id: str) -> bool:
        try:
            result = self._collection.delete_one({"id": product_id})
        except PyMongoError as exc:
            raise StorageError(f"Failed to delete product '{product_id}': {exc}") from exc
        return result.deleted_count > 0

    def decrement_stock(self, product_id: str, quantity: int) -> Product | None:
        # The stock guard lives in the filter, so check and decrement are one
        # document-level atomic operation on the server.
        try:
            doc = self._collection.find_one_and_update(
                {"id": product_id, "stock": {"$gte": quantity}},
                {
                    "$inc": {"stock": -quantity},
                    "$set": {"updated_at": datetime.now(timezone.utc)},
                },
                projection=_PROJECTION,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise StorageError(
                f"Failed to decrement stock of product '{product_id}': {exc}"
            ) from exc
        if doc is None:
            return None
        return product_from_document(doc)
