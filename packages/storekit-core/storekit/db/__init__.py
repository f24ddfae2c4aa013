"""
Database adapter over D1-style statement backends.
"""

from storekit.db.database import SYSTEM_TABLE, Database
from storekit.db.factory import create_backend, open_database
from storekit.db.interface import Backend
from storekit.db.logger import (
    DatabaseLogger,
    LoggingDatabaseLogger,
    NullDatabaseLogger,
    RecordingDatabaseLogger,
)
from storekit.db.predicates import MatchFragment
from storekit.db.sequences import SEQUENCE_TABLE

__all__ = [
    "Backend",
    "Database",
    "DatabaseLogger",
    "LoggingDatabaseLogger",
    "MatchFragment",
    "NullDatabaseLogger",
    "RecordingDatabaseLogger",
    "SEQUENCE_TABLE",
    "SYSTEM_TABLE",
    "create_backend",
    "open_database",
]
