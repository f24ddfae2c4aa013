"""
Storekit Core Library

D1-style database adapter with atomic sequence allocation and a data API layer.
"""

__version__ = "0.1.0"

from storekit.config import StorekitConfig, load_config
from storekit.db import Database, create_backend, open_database
from storekit.errors import BackendExecutionError, StorekitError
from storekit.models import IdentifierReference, RequestContext

__all__ = [
    "BackendExecutionError",
    "Database",
    "IdentifierReference",
    "RequestContext",
    "StorekitConfig",
    "StorekitError",
    "create_backend",
    "load_config",
    "open_database",
]
