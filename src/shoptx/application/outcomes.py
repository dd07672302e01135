"""Transport-neutral outcomes for the order engine.

A mutating call ends in ``Created``/``Updated``/``Deleted``,
``Rejected`` (the caller's request broke a rule) or ``Failed`` (our
side broke).  A read ends in ``Found``, ``NotFound`` or ``Failed``.
Whatever sits in front (CLI, HTTP) only renders these.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

import structlog

from shoptx.application.create_order import CreateOrderHandler
from shoptx.application.delete_order import DeleteOrderHandler
from shoptx.application.order_queries import OrderQueryService
from shoptx.application.update_order_status import UpdateOrderStatusHandler
from shoptx.domain.exceptions import (
    DomainException,
    EngineFailure,
    EntityNotFoundError,
)
from shoptx.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Created:
    order_id: int
    total_amount: Decimal


@dataclass(frozen=True)
class Updated:
    order_id: int
    status: str


@dataclass(frozen=True)
class Deleted:
    order_id: int


@dataclass(frozen=True)
class Rejected:
    kind: str
    detail: str
    status_code: int


@dataclass(frozen=True)
class Failed:
    kind: str
    detail: str
    status_code: int
    retryable: bool = False


@dataclass(frozen=True)
class Found:
    value: Any


@dataclass(frozen=True)
class NotFound:
    detail: str


MutationOutcome = Union[Created, Updated, Deleted, Rejected, Failed]
QueryOutcome = Union[Found, NotFound, Failed]


def _failed(exc: EngineFailure, operation: str) -> Failed:
    logger.error(
        "order_operation_failed",
        operation=operation,
        kind=exc.kind,
        detail=exc.detail,
        exc_info=exc,
    )
    return Failed(
        kind=exc.kind,
        detail=exc.detail,
        status_code=exc.status_code,
        retryable=exc.retryable,
    )


def _run_mutation(operation: str, action: Callable[[], MutationOutcome]) -> MutationOutcome:
    try:
        return action()
    except EngineFailure as exc:
        return _failed(exc, operation)
    except DomainException as exc:
        logger.warning(
            "order_operation_rejected",
            operation=operation,
            kind=exc.kind,
            detail=exc.detail,
        )
        return Rejected(kind=exc.kind, detail=exc.detail, status_code=exc.status_code)


def _run_query(operation: str, action: Callable[[], Any]) -> QueryOutcome:
    try:
        return Found(action())
    except EngineFailure as exc:
        return _failed(exc, operation)
    except EntityNotFoundError as exc:
        return NotFound(exc.detail)


class OrderEndpoint:
    """Runs engine operations and folds their results into outcomes."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._create = CreateOrderHandler(uow_factory)
        self._update_status = UpdateOrderStatusHandler(uow_factory)
        self._delete = DeleteOrderHandler(uow_factory)
        self._queries = OrderQueryService(uow_factory)

    # --- Mutations ------------------------------------------------------------

    def create_order(self, customer_id: Any, items: Any) -> MutationOutcome:
        def action() -> Created:
            receipt = self._create.handle(customer_id, items)
            return Created(order_id=receipt.order_id, total_amount=receipt.total_amount)

        return _run_mutation("create_order", action)

    def update_status(self, order_id: int, status: str) -> MutationOutcome:
        def action() -> Updated:
            new_status = self._update_status.handle(order_id, status)
            return Updated(order_id=order_id, status=new_status.value)

        return _run_mutation("update_status", action)

    def delete_order(self, order_id: int) -> MutationOutcome:
        def action() -> Deleted:
            self._delete.handle(order_id)
            return Deleted(order_id=order_id)

        return _run_mutation("delete_order", action)

    # --- Reads ----------------------------------------------------------------

    def get_by_id(self, order_id: int) -> QueryOutcome:
        return _run_query("get_by_id", lambda: self._queries.get_by_id(order_id))

    def get_by_customer(self, customer_id: int) -> QueryOutcome:
        return _run_query(
            "get_by_customer", lambda: self._queries.get_by_customer(customer_id)
        )

    def get_all(self) -> QueryOutcome:
        return _run_query("get_all", self._queries.get_all)
