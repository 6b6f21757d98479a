"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import structlog
from pymongo import MongoClient
from pymongo.database import Database

from stockroom.application.order_service import OrderService
from stockroom.application.product_service import ProductService
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockroom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from stockroom.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from stockroom.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)

logger = structlog.get_logger(__name__)

PRODUCTS_COLLECTION = "products"
ORDERS_COLLECTION = "orders"


@dataclass(frozen=True)
class Services:
    products: ProductService
    orders: OrderService


@lru_cache(maxsize=None)
def _mongo_database(uri: str, database: str) -> Database:
    # One long-lived client per process; pymongo pools connections inside it.
    logger.info("Connecting to MongoDB", database=database)
    client: MongoClient = MongoClient(uri, tz_aware=True)
    return client[database]


def product_repository(settings: Settings) -> ProductRepository:
    if settings.store == "mongo":
        db = _mongo_database(settings.mongo_uri, settings.mongo_database)
        repo = MongoProductRepository(db[PRODUCTS_COLLECTION])
        repo.ensure_indexes()
        return repo
    return JsonProductRepository(settings.data_dir / f"{PRODUCTS_COLLECTION}.json")


def order_repository(settings: Settings) -> OrderRepository:
    if settings.store == "mongo":
        db = _mongo_database(settings.mongo_uri, settings.mongo_database)
        repo = MongoOrderRepository(db[ORDERS_COLLECTION])
        repo.ensure_indexes()
        return repo
    return JsonOrderRepository(settings.data_dir / f"{ORDERS_COLLECTION}.json")


def build_services(
    settings: Settings,
    product_repo: ProductRepository | None = None,
    order_repo: OrderRepository | None = None,
) -> Services:
    """Build both services over one shared pair of repositories."""
    if product_repo is None:
        product_repo = product_repository(settings)
    if order_repo is None:
        order_repo = order_repository(settings)
    return Services(
        products=ProductService(product_repo),
        orders=OrderService(order_repo, product_repo),
    )
