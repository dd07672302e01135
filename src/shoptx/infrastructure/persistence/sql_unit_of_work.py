"""SQLAlchemy Unit of Work: one connection, one transaction.

Driver errors never leave this module raw.  ``IntegrityError`` means a
constraint the engine relies on was hit, which is an
``InvariantViolation``.  Lost or refused connections (``OperationalError``,
``InterfaceError``, an invalidated connection) are a retryable
``TransientStoreFailure``.  Anything else the driver rejects would fail
again on retry and becomes a plain ``EngineFailure``.  All are logged
here with the full driver message, and callers get a generic one.
"""

from __future__ import annotations

import structlog
from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from shoptx.domain.exceptions import (
    EngineFailure,
    InvariantViolation,
    TransientStoreFailure,
)
from shoptx.domain.repository.unit_of_work import UnitOfWork
from shoptx.infrastructure.persistence.sql_customer_directory import SqlCustomerDirectory
from shoptx.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from shoptx.infrastructure.persistence.sql_product_repository import SqlProductRepository

logger = structlog.get_logger(__name__)


def translate_store_error(exc: SQLAlchemyError, stage: str) -> EngineFailure:
    logger.error(
        "store_error",
        stage=stage,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
    )
    if isinstance(exc, IntegrityError):
        return InvariantViolation("The order store rejected an inconsistent write")
    if isinstance(exc, (OperationalError, InterfaceError)) or getattr(
        exc, "connection_invalidated", False
    ):
        return TransientStoreFailure()
    return EngineFailure("The order store rejected the request")


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        try:
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        except SQLAlchemyError as exc:
            self._close()
            raise translate_store_error(exc, "begin") from exc

        self.customers = SqlCustomerDirectory(self._connection)
        self.products = SqlProductRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._close()
        if isinstance(exc, SQLAlchemyError):
            raise translate_store_error(exc, "execute") from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("Unit of work is not active")
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            raise translate_store_error(exc, "commit") from exc

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            try:
                self._transaction.rollback()
            except SQLAlchemyError as exc:
                # The connection is discarded below; the server drops the
                # transaction with it.
                logger.warning("rollback_failed", error=str(exc))

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
