"""Application service: product lifecycle.

Thin orchestration over the product repository: existence checks,
timestamps and logging.  Repository errors are never recovered here.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from stockroom.domain.exceptions import AlreadyExistsError, EntityNotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class ProductService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def create_product(self, product: Product) -> Product:
        """Store a new product.

        Only a caller-supplied id can collide; server-generated ids skip the
        duplicate check.
        """
        logger.info("Creating product", name=product.name, product_id=product.id)

        if product.id is not None:
            try:
                self._product_repo.find_by_id(product.id)
            except EntityNotFoundError:
                pass
            else:
                logger.warning("Product already exists", product_id=product.id)
                raise AlreadyExistsError(f"Product with ID '{product.id}' already exists")

        product.touch(datetime.now(timezone.utc), created=True)
        created = self._product_repo.create(product)

        logger.info("Product created", product_id=created.id)
        return created

    def get_all_products(self) -> list[Product]:
        logger.info("Fetching all products")
        return self._product_repo.find_all()

    def get_product_by_id(self, product_id: str) -> Product:
        logger.info("Fetching product", product_id=product_id)
        return self._product_repo.find_by_id(product_id)

    def update_product(self, product_id: str, product: Product) -> Product:
        """Replace the stored product's name, price, stock and category.

        Raises EntityNotFoundError when no product has *product_id*.
        """
        logger.info("Updating product", product_id=product_id)

        current = self._product_repo.find_by_id(product_id)
        product.id = product_id
        product.created_at = current.created_at
        product.touch(datetime.now(timezone.utc))
        if not self._product_repo.update(product_id, product):
            logger.warning("Update matched no product", product_id=product_id)
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Product updated", product_id=product_id)
        return product

    def delete_product(self, product_id: str) -> None:
        """Delete a product.  Deleting an absent product is not an error."""
        logger.info("Deleting product", product_id=product_id)
        removed = self._product_repo.delete(product_id)
        logger.info("Product deleted", product_id=product_id, removed=removed)
