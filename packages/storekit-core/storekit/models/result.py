"""
Execution results and identifier references.

ExecutionResult mirrors the acknowledgement a D1-style backend returns
from ``run()``: the rows produced by the statement (if any) plus
metadata about the write.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, List

# Column every inserted row reports back through RETURNING
ROW_ID_ATTR = "_rowId"


@dataclass
class ResultMeta:
    """
    Write metadata reported by the backend.

    Attributes:
        changes: Number of rows changed by the statement
        last_row_id: Row id of the last inserted row, if any
        duration_ms: Wall time spent executing the statement
    """

    changes: int = 0
    last_row_id: Optional[int] = None
    duration_ms: float = 0.0

    def to_dict(self) -> dict:
        return {
            "changes": self.changes,
            "last_row_id": self.last_row_id,
            "duration_ms": self.duration_ms,
        }


@dataclass
class ExecutionResult:
    """
    Raw acknowledgement of an executed statement.

    Attributes:
        results: Rows produced by the statement, as dicts
        success: Whether the backend reported success
        meta: Write metadata
    """

    results: List[dict] = field(default_factory=list)
    success: bool = True
    meta: ResultMeta = field(default_factory=ResultMeta)

    def to_dict(self) -> dict:
        return {
            "results": self.results,
            "success": self.success,
            "meta": self.meta.to_dict(),
        }


@dataclass(frozen=True)
class IdentifierReference:
    """
    Opaque handle to a newly created row.

    Wraps the backend result of an insert. The caller owns it once
    returned; ``id`` is the backend-assigned row identifier.
    """

    result: ExecutionResult

    @property
    def id(self) -> Any:
        """Row id from the RETURNING clause, else the backend's last row id."""
        if self.result.results:
            row = self.result.results[0]
            if ROW_ID_ATTR in row:
                return row[ROW_ID_ATTR]
        return self.result.meta.last_row_id

    def __bool__(self) -> bool:
        return self.id is not None

    def to_dict(self) -> dict:
        return {"id": self.id, **self.result.to_dict()}
