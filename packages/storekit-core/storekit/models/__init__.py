"""
Core data models for storekit.
"""

from storekit.models.context import RequestContext
from storekit.models.log_event import LogEvent
from storekit.models.result import (
    ROW_ID_ATTR,
    ExecutionResult,
    IdentifierReference,
    ResultMeta,
)

__all__ = [
    "ROW_ID_ATTR",
    "ExecutionResult",
    "IdentifierReference",
    "LogEvent",
    "RequestContext",
    "ResultMeta",
]
