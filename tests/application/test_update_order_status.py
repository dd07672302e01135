"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from shoptx.application.create_order import CreateOrderHandler
from shoptx.application.update_order_status import UpdateOrderStatusHandler
from shoptx.domain.exceptions import (
    InvalidRequest,
    InvariantViolation,
    OrderAlreadyFinalized,
    OrderNotFound,
)
from shoptx.domain.model.customer import Customer
from shoptx.domain.model.order import OrderStatus
from shoptx.domain.model.product import Product
from shoptx.domain.model.value_objects import Money
from tests.fakes import FakeStore, fake_uow_factory


def _setup():
    store = FakeStore(
        customers=[Customer(id=1, name="Alice")],
        products=[
            Product(id=1, name="Widget", price=Money.of("10.00"), stock=5),
            Product(id=2, name="Gadget", price=Money.of("5.00"), stock=5),
        ],
    )
    factory = fake_uow_factory(store)
    receipt = CreateOrderHandler(factory).handle(1, [
        {"productId": 1, "quantity": 2},
        {"productId": 2, "quantity": 1},
    ])
    return UpdateOrderStatusHandler(factory), store, receipt.order_id


class TestCancel:

    def test_cancel_restores_stock(self):
        handler, store, order_id = _setup()
        assert (store.stock_of(1), store.stock_of(2)) == (3, 4)

        assert handler.handle(order_id, "cancelled") == OrderStatus.CANCELLED

        assert store.orders[order_id].status == OrderStatus.CANCELLED
        assert (store.stock_of(1), store.stock_of(2)) == (5, 5)

    def test_second_cancel_rejected_and_restores_once(self):
        handler, store, order_id = _setup()
        handler.handle(order_id, "cancelled")

        with pytest.raises(OrderAlreadyFinalized):
            handler.handle(order_id, "cancelled")

        assert (store.stock_of(1), store.stock_of(2)) == (5, 5)

    def test_missing_product_row_rolls_back_cancel(self):
        handler, store, order_id = _setup()
        del store.products[2]

        with pytest.raises(InvariantViolation, match="product #2"):
            handler.handle(order_id, "cancelled")

        assert store.orders[order_id].status == OrderStatus.PENDING
        assert store.stock_of(1) == 3


class TestOtherTransitions:

    def test_complete_leaves_stock_alone(self):
        handler, store, order_id = _setup()
        handler.handle(order_id, OrderStatus.COMPLETED)
        assert store.orders[order_id].status == OrderStatus.COMPLETED
        assert (store.stock_of(1), store.stock_of(2)) == (3, 4)

    def test_completed_order_cannot_be_cancelled(self):
        handler, store, order_id = _setup()
        handler.handle(order_id, "completed")
        with pytest.raises(OrderNotFound, match="already completed"):
            handler.handle(order_id, "cancelled")
        assert (store.stock_of(1), store.stock_of(2)) == (3, 4)

    def test_pending_to_pending_is_noop(self):
        handler, store, order_id = _setup()
        commits = store.commits
        assert handler.handle(order_id, "pending") == OrderStatus.PENDING
        assert store.commits == commits

    def test_unknown_order(self):
        handler, _, _ = _setup()
        with pytest.raises(OrderNotFound, match="Order #999 not found"):
            handler.handle(999, "completed")

    def test_unknown_status_rejected(self):
        handler, _, order_id = _setup()
        with pytest.raises(InvalidRequest, match="Invalid status"):
            handler.handle(order_id, "shipped")

    def test_out_of_range_order_id_rejected_before_the_store(self):
        handler, store, _ = _setup()
        opened = store.units_opened
        with pytest.raises(InvalidRequest, match="Order ID is out of range"):
            handler.handle(2**63, "cancelled")
        assert store.units_opened == opened
