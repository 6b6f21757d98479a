"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.documents import (
    PRODUCT_MUTABLE_FIELDS,
    mutable_fields,
    product_from_document,
    product_to_document,
)
from stockroom.infrastructure.persistence.json_collection import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def create(self, product: Product) -> Product:
        if product.id is None:
            product.id = str(uuid.uuid4())
        self._collection.insert(product_to_document(product))
        return product

    def find_all(self) -> list[Product]:
        return [product_from_document(raw) for raw in self._collection.load()]

    def find_by_id(self, product_id: str) -> Product:
        raw = self._collection.find(product_id)
        if raw is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_from_document(raw)

    def update(self, product_id: str, product: Product) -> bool:
        fields = mutable_fields(product_to_document(product), PRODUCT_MUTABLE_FIELDS)
        return self._collection.set_fields(product_id, fields)

    def delete(self, product_id: str) -> bool:
        return self._collection.remove(product_id)

    def decrement_stock(self, product_id: str, quantity: int) -> Product | None:
        with self._collection.lock:
            raw = self._collection.find(product_id)
            if raw is None or raw["stock"] < quantity:
                return None
            product = product_from_document(raw)
            product.remove_stock(quantity)
            product.touch(datetime.now(timezone.utc))
            self.update(product_id, product)
        return product
