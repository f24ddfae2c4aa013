"""
Backend and adapter factory.

Creates the configured backend once at startup and a Database adapter
per unit of work on top of it. Nothing here is cached at module level;
callers hold on to what they create.
"""

import logging

from storekit.db.database import Database
from storekit.db.interface import Backend
from storekit.db.logger import DatabaseLogger, LoggingDatabaseLogger
from storekit.models.context import RequestContext

logger = logging.getLogger(__name__)


def create_backend(config=None) -> Backend:
    """
    Create the backend described by the configuration.

    Args:
        config: Optional StorekitConfig. If not provided, loads from default location.

    Returns:
        Unconnected Backend instance

    Raises:
        ValueError: If database configuration is invalid
    """
    if config is None:
        from storekit.config import load_config
        config = load_config()

    db_type = config.database.type.lower()

    if db_type == "sqlite":
        from storekit.db.sqlite import SQLiteBackend

        path = config.database.sqlite_path
        logger.info(f"Using SQLite backend: {path}")
        return SQLiteBackend(path)

    raise ValueError(
        f"Unknown database type: {db_type}. "
        "Use 'sqlite'."
    )


def create_logger(config=None) -> DatabaseLogger:
    """Build the statement logger described by the configuration."""
    if config is None:
        return LoggingDatabaseLogger()

    target = logging.getLogger("storekit.db")
    target.setLevel(config.log_level)
    return LoggingDatabaseLogger(target, include_params=config.logging.include_params)


async def open_database(
    backend: Backend,
    config=None,
    context: RequestContext | None = None,
    db_logger: DatabaseLogger | None = None,
    force_drop: bool = False,
) -> Database:
    """
    Connect the backend and return an opened Database adapter.

    Args:
        backend: Backend to execute against (connected if needed)
        config: Optional StorekitConfig used to build the logger
        context: Correlation context for the unit of work
        db_logger: Explicit event sink, overrides the configured one
        force_drop: Drop every table before bootstrapping

    Returns:
        Opened Database instance
    """
    await backend.connect()
    db = Database(
        backend,
        logger=db_logger or create_logger(config),
        context=context or RequestContext(),
    )
    await db.open(force_drop=force_drop)
    return db
