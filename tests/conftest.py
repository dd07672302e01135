"""Shared fixtures: a started SQLite-file database per test."""

import pytest

from shoptx.infrastructure.config import Settings
from shoptx.infrastructure.persistence.database import Database


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'shoptx.db'}",
        sqlite_busy_timeout=30.0,
        _env_file=None,
    )


@pytest.fixture
def database(settings):
    db = Database(settings).start()
    db.create_schema()
    yield db
    db.dispose()
