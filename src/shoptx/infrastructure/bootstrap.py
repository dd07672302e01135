"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shoptx.infrastructure.config import Settings
from shoptx.infrastructure.logging import configure_logging
from shoptx.infrastructure.persistence.database import Database


def bootstrap(settings: Settings) -> Database:
    """Configure logging and start the database for this process.

    The caller owns the returned Database and must ``dispose()`` it on
    shutdown.
    """
    configure_logging(settings.log_level, json_output=settings.log_json)
    return Database(settings).start()
