"""
Log events emitted by the database adapter.

One event is emitted per operation attempt at info level, and one more
at error level when the attempt fails.
"""

from dataclasses import dataclass
from typing import Optional, List

from storekit.models.context import RequestContext

# Operation kinds, one per executor operation
LOG_EVENT_KINDS = ("schema", "query", "delete", "insert", "update")


@dataclass(frozen=True)
class LogEvent:
    """
    A single database operation attempt.

    Attributes:
        kind: Operation kind (schema, query, delete, insert, update)
        label: Caller-supplied description of the statement, or ""
        sql: Final statement text sent to the backend
        params: Coerced parameters bound to the statement, or the raw
            values when coercion itself failed
        error: Failure description, set only on error events
        context: Correlation context of the unit of work
    """

    kind: str
    sql: str
    label: str = ""
    params: Optional[List] = None
    error: Optional[str] = None
    context: Optional[RequestContext] = None

    def __post_init__(self):
        if self.kind not in LOG_EVENT_KINDS:
            raise ValueError(f"Invalid kind. Must be one of: {', '.join(LOG_EVENT_KINDS)}")

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def with_error(self, error: BaseException | str) -> "LogEvent":
        """Return a copy of this event carrying a failure description."""
        return LogEvent(
            kind=self.kind,
            sql=self.sql,
            label=self.label,
            params=self.params,
            error=str(error),
            context=self.context,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for structured logging."""
        data = {
            "type": self.kind,
            "name": self.label,
            "sql": self.sql,
        }
        if self.params is not None:
            data["params"] = self.params
        if self.error is not None:
            data["error"] = self.error
        if self.context is not None:
            data["request_id"] = self.context.request_id
        return data
