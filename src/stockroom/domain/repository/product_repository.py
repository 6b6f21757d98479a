"""Abstract repository for the Product aggregate."""

from __future__ import annotations

from abc import abstractmethod

from stockroom.domain.model.product import Product
from stockroom.domain.repository.base import Repository


class ProductRepository(Repository[Product]):

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> Product | None:
        """Atomically take *quantity* units out of stock.

        The decrement only happens if the stored stock is at least
        *quantity*, checked and applied in one store operation.  Returns the
        updated product, or None when no product satisfied that guard.
        """
