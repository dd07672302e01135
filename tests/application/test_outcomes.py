"""Tests for mapping engine results onto caller-facing outcomes."""

from decimal import Decimal

from shoptx.application.outcomes import (
    Created,
    Deleted,
    Failed,
    Found,
    NotFound,
    OrderEndpoint,
    Rejected,
    Updated,
)
from shoptx.domain.model.customer import Customer
from shoptx.domain.model.product import Product
from shoptx.domain.model.value_objects import Money
from tests.fakes import FakeStore, fake_uow_factory


def _setup():
    store = FakeStore(
        customers=[Customer(id=1, name="Alice")],
        products=[Product(id=1, name="Widget", price=Money.of("10.00"), stock=1)],
    )
    return OrderEndpoint(fake_uow_factory(store)), store


class TestMutationOutcomes:

    def test_created(self):
        endpoint, _ = _setup()
        outcome = endpoint.create_order(1, [{"productId": 1, "quantity": 1}])
        assert outcome == Created(order_id=1, total_amount=Decimal("10.00"))

    def test_each_rejection_kind_is_distinct(self):
        endpoint, _ = _setup()
        outcomes = [
            endpoint.create_order(1, []),
            endpoint.create_order(9, [{"productId": 1, "quantity": 1}]),
            endpoint.create_order(1, [{"productId": 9, "quantity": 1}]),
            endpoint.create_order(1, [{"productId": 1, "quantity": 2}]),
            endpoint.update_status(9, "completed"),
        ]
        assert all(isinstance(o, Rejected) for o in outcomes)
        assert [o.kind for o in outcomes] == [
            "invalid_request",
            "customer_not_found",
            "product_not_found",
            "insufficient_stock",
            "order_not_found",
        ]
        assert [o.status_code for o in outcomes] == [400, 404, 404, 409, 404]
        assert "Widget" in outcomes[3].detail

    def test_updated_and_deleted(self):
        endpoint, store = _setup()
        endpoint.create_order(1, [{"productId": 1, "quantity": 1}])

        assert endpoint.update_status(1, "cancelled") == Updated(order_id=1, status="cancelled")
        assert store.stock_of(1) == 1
        assert endpoint.delete_order(1) == Deleted(order_id=1)

    def test_oversized_ids_end_in_rejected(self):
        endpoint, store = _setup()
        outcomes = [
            endpoint.create_order(2**70, [{"productId": 1, "quantity": 1}]),
            endpoint.create_order(1, [{"productId": 1, "quantity": 2**40}]),
            endpoint.update_status(2**70, "completed"),
            endpoint.delete_order(2**70),
        ]
        assert all(isinstance(o, Rejected) for o in outcomes)
        assert {o.kind for o in outcomes} == {"invalid_request"}
        assert store.units_opened == 0

    def test_order_with_many_lines_is_created(self):
        store = FakeStore(
            customers=[Customer(id=1, name="Alice")],
            products=[
                Product(id=i, name=f"Part {i}", price=Money.of("1.00"), stock=1)
                for i in range(1, 52)
            ],
        )
        endpoint = OrderEndpoint(fake_uow_factory(store))

        outcome = endpoint.create_order(1, [{"productId": i, "quantity": 1} for i in range(1, 52)])

        assert outcome == Created(order_id=1, total_amount=Decimal("51.00"))

    def test_double_cancel_is_rejected_as_conflict(self):
        endpoint, _ = _setup()
        endpoint.create_order(1, [{"productId": 1, "quantity": 1}])
        endpoint.update_status(1, "cancelled")

        outcome = endpoint.update_status(1, "cancelled")

        assert isinstance(outcome, Rejected)
        assert outcome.kind == "order_not_found"
        assert outcome.status_code == 409

    def test_store_failure_is_failed_and_retryable(self):
        endpoint, store = _setup()
        store.fail_decrement_for.add(1)

        outcome = endpoint.create_order(1, [{"productId": 1, "quantity": 1}])

        assert isinstance(outcome, Failed)
        assert outcome.kind == "transient_store_failure"
        assert outcome.retryable is True
        assert outcome.status_code == 503


class TestQueryOutcomes:

    def test_found_and_not_found(self):
        endpoint, _ = _setup()
        endpoint.create_order(1, [{"productId": 1, "quantity": 1}])

        found = endpoint.get_by_id(1)
        assert isinstance(found, Found)
        assert found.value.id == 1

        assert isinstance(endpoint.get_by_id(2), NotFound)
        assert isinstance(endpoint.get_by_customer(5), NotFound)
        assert endpoint.get_all() == Found([found.value])

    def test_oversized_ids_are_not_found(self):
        endpoint, _ = _setup()
        assert isinstance(endpoint.get_by_id(2**70), NotFound)
        assert isinstance(endpoint.get_by_customer(2**70), NotFound)
