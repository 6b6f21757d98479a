"""Integration tests for order placement.

Uses in-memory fake repositories — no file I/O.
"""

import threading

import pytest

from stockroom.application.order_service import OrderService
from stockroom.domain.exceptions import (
    InsufficientStockError,
    InvalidProductError,
    OrderPersistenceError,
    StockUpdateError,
    ValidationError,
)
from stockroom.domain.model.order import OrderStatus
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository, RacingProductRepository


def _widget(stock: int = 5) -> Product:
    return Product(id="p-1", name="Widget", price=Money.of("10.0"), stock=stock)


def _setup(
    products: list[Product] | None = None,
) -> tuple[OrderService, FakeOrderRepository, FakeProductRepository]:
    """Build the service with fake repos, pre-loaded with a Widget by default."""
    if products is None:
        products = [_widget()]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    return OrderService(order_repo, product_repo), order_repo, product_repo


class TestCreateOrderHappyPath:

    def test_total_and_stock(self):
        service, _, product_repo = _setup()
        order = service.create_order("p-1", 3)
        assert order.total_price == Money.of("30.00")
        assert product_repo.find_by_id("p-1").stock == 2

    def test_order_is_pending_and_persisted(self):
        service, order_repo, _ = _setup()
        order = service.create_order("p-1", 1)
        assert order.id is not None
        assert order.status == OrderStatus.PENDING
        saved = order_repo.find_by_id(order.id)
        assert saved.product_id == "p-1"
        assert saved.quantity.value == 1
        assert saved.created_at is not None
        assert saved.updated_at == saved.created_at

    def test_can_order_entire_stock(self):
        service, _, product_repo = _setup()
        service.create_order("p-1", 5)
        assert product_repo.find_by_id("p-1").stock == 0

    def test_widget_scenario(self):
        service, order_repo, product_repo = _setup()

        first = service.create_order("p-1", 3)
        assert first.total_price == Money.of("30")
        assert product_repo.find_by_id("p-1").stock == 2

        with pytest.raises(InsufficientStockError):
            service.create_order("p-1", 3)
        assert product_repo.find_by_id("p-1").stock == 2
        assert len(order_repo.find_all()) == 1


class TestCreateOrderPreconditions:

    def test_unknown_product_rejected(self):
        service, order_repo, _ = _setup()
        with pytest.raises(InvalidProductError, match="Invalid product ID 'nope'"):
            service.create_order("nope", 1)
        assert order_repo.find_all() == []

    def test_insufficient_stock_rejected(self):
        service, order_repo, product_repo = _setup()
        with pytest.raises(InsufficientStockError, match="need 6, have 5"):
            service.create_order("p-1", 6)
        assert product_repo.find_by_id("p-1").stock == 5
        assert order_repo.find_all() == []

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        service, order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            service.create_order("p-1", quantity)
        assert order_repo.find_all() == []

    def test_later_price_change_does_not_reprice(self):
        service, order_repo, product_repo = _setup()
        order = service.create_order("p-1", 2)

        widget = product_repo.find_by_id("p-1")
        widget.price = Money.of("99.99")
        product_repo.update("p-1", widget)

        assert order_repo.find_by_id(order.id).total_price == Money.of("20.00")


class TestCreateOrderPartialFailures:

    def test_order_write_failure_leaves_stock_alone(self):
        service, order_repo, product_repo = _setup()
        order_repo.fail_create = True

        with pytest.raises(OrderPersistenceError, match="Failed to create order"):
            service.create_order("p-1", 2)
        assert product_repo.find_by_id("p-1").stock == 5

    def test_stock_failure_rolls_back_order(self):
        service, order_repo, product_repo = _setup()
        product_repo.fail_decrement = True

        with pytest.raises(StockUpdateError, match="Failed to update product stock"):
            service.create_order("p-1", 2)
        assert order_repo.find_all() == []
        assert product_repo.find_by_id("p-1").stock == 5

    def test_failed_rollback_still_reports_stock_error(self):
        service, order_repo, product_repo = _setup()
        product_repo.fail_decrement = True
        order_repo.fail_delete = True

        with pytest.raises(StockUpdateError):
            service.create_order("p-1", 2)
        # The orphaned order is left behind; callers must not trust a failure
        # to mean nothing was written.
        assert len(order_repo.find_all()) == 1


class TestCreateOrderConcurrency:

    @pytest.mark.parametrize("stock, callers", [(5, 20), (10, 4), (3, 3)])
    def test_never_oversells(self, stock, callers):
        order_repo = FakeOrderRepository()
        product_repo = RacingProductRepository([_widget(stock)], parties=callers)
        service = OrderService(order_repo, product_repo)

        successes: list[str] = []
        rejections: list[Exception] = []
        unexpected: list[Exception] = []
        lock = threading.Lock()

        def place() -> None:
            try:
                order = service.create_order("p-1", 1)
            except InsufficientStockError as exc:
                with lock:
                    rejections.append(exc)
            except Exception as exc:  # surfaced through the assertion below
                with lock:
                    unexpected.append(exc)
            else:
                with lock:
                    successes.append(order.id)

        threads = [threading.Thread(target=place) for _ in range(callers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert unexpected == []
        assert len(successes) == min(callers, stock)
        assert len(rejections) == callers - len(successes)
        assert product_repo.find_by_id("p-1").stock == stock - len(successes)
        assert sorted(o.id for o in order_repo.find_all()) == sorted(successes)

    def test_product_deleted_mid_placement(self):
        service, order_repo, product_repo = _setup()

        # Simulate the product vanishing between the stock check and the decrement.
        original = product_repo.decrement_stock

        def vanish_then_decrement(product_id, quantity):
            product_repo.delete(product_id)
            return original(product_id, quantity)

        product_repo.decrement_stock = vanish_then_decrement

        with pytest.raises(InvalidProductError):
            service.create_order("p-1", 1)
        assert order_repo.find_all() == []
