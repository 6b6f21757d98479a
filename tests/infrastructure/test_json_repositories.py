"""Tests for the JSON-file repositories against a temporary directory."""

import json
import threading
from datetime import datetime, timezone

import pytest

from stockroom.domain.exceptions import AlreadyExistsError, EntityNotFoundError, StorageError
from stockroom.domain.model.order import Order, OrderStatus
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money, Quantity
from stockroom.infrastructure.persistence.json_order_repository import JsonOrderRepository
from stockroom.infrastructure.persistence.json_product_repository import JsonProductRepository

NOW = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


def _product(**overrides) -> Product:
    fields = {
        "id": None,
        "name": "Widget",
        "price": Money.of("10.50"),
        "stock": 5,
        "category": "tools",
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def products(tmp_path):
    return JsonProductRepository(tmp_path / "products.json")


@pytest.fixture
def orders(tmp_path):
    return JsonOrderRepository(tmp_path / "orders.json")


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path, products):
        assert json.loads((tmp_path / "products.json").read_text()) == []
        assert products.find_all() == []

    def test_create_assigns_id_and_round_trips(self, products):
        created = products.create(_product())
        assert created.id

        loaded = products.find_by_id(created.id)
        assert loaded == created
        assert loaded.price.amount == Money.of("10.50").amount
        assert loaded.created_at == NOW

    def test_document_shape(self, tmp_path, products):
        products.create(_product(id="sku-1"))
        (doc,) = json.loads((tmp_path / "products.json").read_text())
        assert doc == {
            "id": "sku-1",
            "name": "Widget",
            "price": "10.50",
            "currency": "USD",
            "stock": 5,
            "category": "tools",
            "created_at": "2026-03-01T12:30:00+00:00",
            "updated_at": "2026-03-01T12:30:00+00:00",
        }

    def test_duplicate_id_rejected(self, products):
        products.create(_product(id="sku-1"))
        with pytest.raises(AlreadyExistsError):
            products.create(_product(id="sku-1"))

    def test_find_missing(self, products):
        with pytest.raises(EntityNotFoundError):
            products.find_by_id("missing")

    def test_update_keeps_created_at(self, products):
        created = products.create(_product())
        later = datetime(2026, 4, 1, tzinfo=timezone.utc)

        matched = products.update(
            created.id,
            _product(name="Gizmo", stock=1, created_at=None, updated_at=later),
        )

        assert matched is True
        loaded = products.find_by_id(created.id)
        assert (loaded.name, loaded.stock) == ("Gizmo", 1)
        assert loaded.created_at == NOW
        assert loaded.updated_at == later

    def test_update_missing_is_reported(self, products):
        assert products.update("missing", _product()) is False

    def test_delete_twice(self, products):
        created = products.create(_product())
        assert products.delete(created.id) is True
        assert products.delete(created.id) is False

    def test_decrement_stock(self, products):
        created = products.create(_product(stock=5))

        updated = products.decrement_stock(created.id, 3)

        assert updated.stock == 2
        assert products.find_by_id(created.id).stock == 2

    def test_decrement_stock_guard(self, products):
        created = products.create(_product(stock=2))
        assert products.decrement_stock(created.id, 3) is None
        assert products.decrement_stock("missing", 1) is None
        assert products.find_by_id(created.id).stock == 2

    def test_concurrent_decrements_never_go_negative(self, products):
        created = products.create(_product(stock=10))
        results = []

        def take_one():
            results.append(products.decrement_stock(created.id, 1))

        threads = [threading.Thread(target=take_one) for _ in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r is not None for r in results) == 10
        assert products.find_by_id(created.id).stock == 0

    def test_corrupt_file_is_a_storage_error(self, tmp_path, products):
        (tmp_path / "products.json").write_text("{not json")
        with pytest.raises(StorageError, match="Cannot read"):
            products.find_all()


class TestJsonOrderRepository:

    def _order(self, **overrides) -> Order:
        fields = {
            "id": None,
            "product_id": "sku-1",
            "quantity": Quantity(3),
            "total_price": Money.of("31.50"),
            "status": OrderStatus.PENDING,
            "created_at": NOW,
            "updated_at": NOW,
        }
        fields.update(overrides)
        return Order(**fields)

    def test_round_trip(self, orders):
        created = orders.create(self._order())
        assert orders.find_by_id(created.id) == created

    def test_find_all(self, orders):
        orders.create(self._order())
        orders.create(self._order(quantity=Quantity(1)))
        assert len(orders.find_all()) == 2

    def test_update_status(self, orders):
        created = orders.create(self._order())
        orders.update(created.id, self._order(status=OrderStatus.SHIPPED))
        assert orders.find_by_id(created.id).status == OrderStatus.SHIPPED

    def test_update_if_status_matches(self, orders):
        created = orders.create(self._order())
        assert orders.update_if_status(
            created.id, OrderStatus.PENDING, self._order(status=OrderStatus.SHIPPED)
        ) is True
        assert orders.find_by_id(created.id).status == OrderStatus.SHIPPED

    def test_update_if_status_stale(self, orders):
        created = orders.create(self._order(status=OrderStatus.CANCELLED))
        assert orders.update_if_status(
            created.id, OrderStatus.PENDING, self._order(status=OrderStatus.SHIPPED)
        ) is False
        assert orders.find_by_id(created.id).status == OrderStatus.CANCELLED

    def test_update_if_status_missing(self, orders):
        assert orders.update_if_status(
            "missing", OrderStatus.PENDING, self._order(status=OrderStatus.SHIPPED)
        ) is False

    def test_delete_missing(self, orders):
        assert orders.delete("missing") is False
