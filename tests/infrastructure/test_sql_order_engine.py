"""End-to-end tests of the order engine against a real SQLite store."""

import threading
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from shoptx.application.add_customer import AddCustomerHandler
from shoptx.application.add_product import AddProductHandler
from shoptx.application.create_order import CreateOrderHandler
from shoptx.application.delete_order import DeleteOrderHandler
from shoptx.application.order_queries import OrderQueryService
from shoptx.application.outcomes import NotFound, OrderEndpoint, Rejected
from shoptx.application.update_order_status import UpdateOrderStatusHandler
from shoptx.application.update_product import UpdateProductHandler
from shoptx.domain.exceptions import (
    InsufficientStock,
    OrderAlreadyFinalized,
    ProductNotFound,
    TransientStoreFailure,
)
from shoptx.infrastructure.persistence.schema import order_items, orders


def _stock(database, product_id: int) -> int:
    with database.unit_of_work() as uow:
        return uow.products.get_by_id(product_id).stock


def _count(database, table) -> int:
    with database.engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


@pytest.fixture
def catalog(database):
    """Customer C1 plus products A (10.00, stock 5) and B (5.00, stock 5)."""
    customer = AddCustomerHandler(database.unit_of_work).handle("C1", "c1@example.com")
    add = AddProductHandler(database.unit_of_work)
    product_a = add.handle("Product A", "10.00", 5)
    product_b = add.handle("Product B", "5.00", 5)
    return customer.id, product_a.id, product_b.id


class TestScenarios:

    def test_create_then_cancel(self, database, catalog):
        customer_id, a, b = catalog
        receipt = CreateOrderHandler(database.unit_of_work).handle(customer_id, [
            {"productId": a, "quantity": 2},
            {"productId": b, "quantity": 1},
        ])

        order = OrderQueryService(database.unit_of_work).get_by_id(receipt.order_id)
        assert receipt.total_amount == Decimal("25.00")
        assert order.total_amount == Decimal("25.00")
        assert order.status == "pending"
        assert (_stock(database, a), _stock(database, b)) == (3, 4)

        UpdateOrderStatusHandler(database.unit_of_work).handle(receipt.order_id, "cancelled")

        order = OrderQueryService(database.unit_of_work).get_by_id(receipt.order_id)
        assert order.status == "cancelled"
        assert (_stock(database, a), _stock(database, b)) == (5, 5)

    def test_insufficient_stock_writes_nothing(self, database, catalog):
        customer_id, _, _ = catalog
        scarce = AddProductHandler(database.unit_of_work).handle("Scarce", "3.00", 1)

        with pytest.raises(InsufficientStock):
            CreateOrderHandler(database.unit_of_work).handle(
                customer_id, [{"productId": scarce.id, "quantity": 2}]
            )

        assert _count(database, orders) == 0
        assert _count(database, order_items) == 0
        assert _stock(database, scarce.id) == 1


class TestRoundTrip:

    def test_items_and_price_snapshot_survive_price_change(self, database, catalog):
        customer_id, a, b = catalog
        receipt = CreateOrderHandler(database.unit_of_work).handle(customer_id, [
            {"productId": b, "quantity": 3},
            {"productId": a, "quantity": 1},
        ])
        UpdateProductHandler(database.unit_of_work).handle(a, "99.99")

        order = OrderQueryService(database.unit_of_work).get_by_id(receipt.order_id)

        assert order.customer_name == "C1"
        assert order.total_amount == Decimal("25.00")
        assert [(i.product_id, i.quantity, i.price_per_item) for i in order.items] == [
            (b, 3, Decimal("5.00")),
            (a, 1, Decimal("10.00")),
        ]
        assert sum(i.line_total for i in order.items) == order.total_amount

    def test_listing_most_recent_first(self, database, catalog):
        customer_id, a, b = catalog
        create = CreateOrderHandler(database.unit_of_work)
        first = create.handle(customer_id, [{"productId": a, "quantity": 1}])
        second = create.handle(customer_id, [{"productId": b, "quantity": 1}])

        listed = OrderQueryService(database.unit_of_work).get_by_customer(customer_id)

        assert [o.id for o in listed] == [second.order_id, first.order_id]
        assert [len(o.items) for o in listed] == [1, 1]


class TestAtomicity:

    def test_missing_product_leaves_no_rows(self, database, catalog):
        customer_id, a, _ = catalog
        with pytest.raises(ProductNotFound):
            CreateOrderHandler(database.unit_of_work).handle(customer_id, [
                {"productId": a, "quantity": 1},
                {"productId": 999, "quantity": 1},
            ])
        assert _count(database, orders) == 0
        assert _stock(database, a) == 5

    def test_failure_after_writes_rolls_back(self, database, catalog):
        customer_id, a, b = catalog
        uow = database.unit_of_work()

        with pytest.raises(RuntimeError):
            with uow:
                uow.products.decrement_stock(a, 2)
                raise RuntimeError("crash between statements")

        assert _stock(database, a) == 5

    def test_store_error_becomes_transient_failure(self, database, catalog):
        with pytest.raises(TransientStoreFailure):
            with database.unit_of_work() as uow:
                uow.products._conn.exec_driver_sql("SELECT * FROM no_such_table")

    def test_oversized_ids_are_rejected_without_reaching_the_driver(self, database, catalog):
        endpoint = OrderEndpoint(database.unit_of_work)

        outcome = endpoint.create_order(2**70, [{"productId": 1, "quantity": 1}])

        assert isinstance(outcome, Rejected)
        assert outcome.kind == "invalid_request"
        assert isinstance(endpoint.get_by_id(2**70), NotFound)
        assert _count(database, orders) == 0

    def test_cancel_twice_restores_once(self, database, catalog):
        customer_id, a, _ = catalog
        receipt = CreateOrderHandler(database.unit_of_work).handle(
            customer_id, [{"productId": a, "quantity": 4}]
        )
        update = UpdateOrderStatusHandler(database.unit_of_work)
        update.handle(receipt.order_id, "cancelled")

        with pytest.raises(OrderAlreadyFinalized):
            update.handle(receipt.order_id, "cancelled")

        assert _stock(database, a) == 5

    def test_delete_restores_stock_and_cascades(self, database, catalog):
        customer_id, a, b = catalog
        receipt = CreateOrderHandler(database.unit_of_work).handle(customer_id, [
            {"productId": a, "quantity": 2},
            {"productId": b, "quantity": 2},
        ])

        DeleteOrderHandler(database.unit_of_work).handle(receipt.order_id)

        assert _count(database, orders) == 0
        assert _count(database, order_items) == 0
        assert (_stock(database, a), _stock(database, b)) == (5, 5)


class TestConcurrency:

    def test_concurrent_orders_never_oversell(self, database, catalog):
        customer_id, _, _ = catalog
        n = 8
        product = AddProductHandler(database.unit_of_work).handle("Hot item", "1.00", n - 1)
        create = CreateOrderHandler(database.unit_of_work)

        results: list[str] = []
        lock = threading.Lock()
        start = threading.Barrier(n)

        def place_order():
            start.wait()
            try:
                create.handle(customer_id, [{"productId": product.id, "quantity": 1}])
                outcome = "ok"
            except InsufficientStock:
                outcome = "insufficient"
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=place_order) for _ in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert results.count("ok") == n - 1
        assert results.count("insufficient") == 1
        assert _stock(database, product.id) == 0
        assert _count(database, orders) == n - 1
