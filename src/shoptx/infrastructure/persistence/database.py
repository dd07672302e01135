"""Database connection lifecycle.

One ``Database`` per process: ``start()`` builds the SQLAlchemy engine
and its connection pool, ``dispose()`` releases them on shutdown.
Handlers never see the engine; they get ``Database.unit_of_work`` as a
factory.

SQLite needs two tweaks to behave like a row-locking store: the
pysqlite driver's own transaction handling is switched off so that
every unit of work can start with ``BEGIN IMMEDIATE`` (writers queue on
the busy timeout instead of failing on lock upgrade), and foreign keys
are enforced per connection.
"""

from __future__ import annotations

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from shoptx.infrastructure.config import Settings
from shoptx.infrastructure.persistence.schema import metadata
from shoptx.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork

logger = structlog.get_logger(__name__)


class Database:

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not started; call start() first")
        return self._engine

    @property
    def is_sqlite(self) -> bool:
        return make_url(self._settings.database_url).get_backend_name() == "sqlite"

    def start(self) -> Database:
        if self._engine is not None:
            return self

        settings = self._settings
        if self.is_sqlite:
            engine = create_engine(
                settings.database_url,
                echo=settings.echo_sql,
                connect_args={
                    "check_same_thread": False,
                    "timeout": settings.sqlite_busy_timeout,
                },
            )
            _enable_sqlite_locking(engine)
        else:
            engine = create_engine(
                settings.database_url,
                echo=settings.echo_sql,
                pool_pre_ping=settings.pool_pre_ping,
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
            )

        self._engine = engine
        logger.info("database_started", backend=engine.dialect.name)
        return self

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.engine)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("database_disposed")

    def __enter__(self) -> Database:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


def _enable_sqlite_locking(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
