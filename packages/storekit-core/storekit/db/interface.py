"""
Abstract backend interface.

A backend accepts parameterized statements and returns tabular results,
in the manner of a D1 binding: ``all`` for retrieval, ``run`` for
anything that changes data, ``first`` for single-row lookups.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from storekit.models.result import ExecutionResult


class Backend(ABC):
    """
    Abstract base class for statement backends.

    Implementations must:
    - Execute one statement per call, atomically
    - Return rows as dicts keyed by column name
    - Raise BackendExecutionError for any statement failure
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connection."""
        pass

    @abstractmethod
    async def all(self, sql: str, params: Sequence[Any] = ()) -> list[dict]:
        """
        Execute a retrieval statement and return every row.

        Args:
            sql: Statement with ? placeholders
            params: Values bound to the placeholders, in order

        Returns:
            List of row dicts
        """
        pass

    @abstractmethod
    async def run(self, sql: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """
        Execute a statement that may change data.

        Rows produced by a RETURNING clause are included in the result.

        Args:
            sql: Statement with ? placeholders
            params: Values bound to the placeholders, in order

        Returns:
            ExecutionResult with rows and write metadata
        """
        pass

    async def first(self, sql: str, params: Sequence[Any] = ()) -> dict | None:
        """
        Execute a retrieval statement and return the first row.

        Returns:
            Row dict or None if no results
        """
        rows = await self.all(sql, params)
        return rows[0] if rows else None

    @property
    def supports_drop(self) -> bool:
        """Can this backend drop every table on request?"""
        return False

    async def drop_all_tables(self) -> None:
        """
        Drop every user table.

        Only called when ``supports_drop`` is True; backends that cannot
        drop tables leave this as a no-op.
        """
        pass
