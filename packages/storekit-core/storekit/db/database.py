"""
Database adapter.

Implements the storage contract the application framework consumes:
schema statements, queries, inserts, updates, deletes, id allocation,
field type mapping and JSON predicate translation.

Every statement is coerced, logged, executed, and on failure logged
again before the original exception propagates.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple

from storekit.db.coercion import coerce_params
from storekit.db.interface import Backend
from storekit.db.logger import DatabaseLogger, LoggingDatabaseLogger
from storekit.db.predicates import MatchFragment, qmark, translate_contains
from storekit.db.sequences import SequenceAllocator, is_sequence_table_insert
from storekit.db.types import map_type
from storekit.errors import BackendExecutionError
from storekit.models.context import RequestContext
from storekit.models.log_event import LogEvent
from storekit.models.result import ROW_ID_ATTR, ExecutionResult, IdentifierReference

logger = logging.getLogger(__name__)

# Table the framework creates once its schema has been applied
SYSTEM_TABLE = "_System_"


class Database:
    """
    Storage adapter over a statement backend.

    Instances are cheap: create one per unit of work with its own
    RequestContext and share the backend between them.
    """

    def __init__(
        self,
        backend: Backend,
        logger: Optional[DatabaseLogger] = None,
        context: Optional[RequestContext] = None,
        owns_backend: bool = False,
    ):
        """
        Initialize the adapter.

        Args:
            backend: Statement backend to execute against
            logger: Event sink. Defaults to LoggingDatabaseLogger.
            context: Correlation context attached to every log event
            owns_backend: Close the backend when this adapter is closed
        """
        self.backend = backend
        self.logger = logger or LoggingDatabaseLogger()
        self.context = context
        self.owns_backend = owns_backend
        self.id_system = SequenceAllocator(self)

    def with_context(self, context: RequestContext) -> "Database":
        """Return an adapter sharing this backend and logger under a new context."""
        return Database(self.backend, logger=self.logger, context=context)

    async def check_schema_version_update(self) -> bool:
        """
        Check whether the framework's schema has never been applied.

        Returns:
            True if the system table is absent (or the check itself fails)
        """
        try:
            row = await self.backend.first(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ? LIMIT 1",
                [SYSTEM_TABLE],
            )
        except BackendExecutionError as e:
            logger.warning(f"Schema check failed, assuming schema update needed: {e}")
            return True
        return row is None

    async def open(self, force_drop: bool = False) -> None:
        """
        Prepare the database for use.

        Args:
            force_drop: Drop every existing table first
        """
        if force_drop:
            if self.backend.supports_drop:
                await self.backend.drop_all_tables()
            else:
                logger.warning(f"force_drop not supported by {type(self.backend).__name__}")
        await self.id_system.setup()

    async def close(self) -> None:
        """Release the backend if this adapter owns it."""
        if self.owns_backend:
            await self.backend.close()

    def _event(self, kind: str, sql: str, label: Optional[str], params: Optional[list]) -> LogEvent:
        return LogEvent(
            kind=kind,
            sql=sql,
            label=label or "",
            params=params,
            context=self.context,
        )

    async def _execute(
        self,
        kind: str,
        sql: str,
        params: Optional[Sequence[Any]],
        label: Optional[str],
        run: Callable[[Optional[list]], Awaitable[Any]],
    ) -> Any:
        try:
            values = None if params is None else coerce_params(params)
        except Exception as e:
            # Nothing reached the backend, so the event carries the raw values
            self.logger.error(self._event(kind, sql, label, list(params)).with_error(e))
            raise

        event = self._event(kind, sql, label, values)
        self.logger.info(event)
        try:
            return await run(values)
        except Exception as e:
            self.logger.error(event.with_error(e))
            raise

    async def scheme(self, sql: str, label: Optional[str] = None) -> ExecutionResult:
        """Execute a schema definition statement."""
        return await self._execute(
            "schema", sql, None, label,
            lambda values: self.backend.run(sql),
        )

    async def query(
        self,
        sql: str,
        params: Sequence[Any] = (),
        label: Optional[str] = None,
    ) -> list[dict]:
        """Run a parameterized query and return its rows."""
        return await self._execute(
            "query", sql, params, label,
            lambda values: self.backend.all(sql, values),
        )

    async def delete(
        self,
        sql: str,
        params: Sequence[Any] = (),
        label: Optional[str] = None,
    ) -> ExecutionResult:
        """Run a delete (or other plain mutation) and return the raw result."""
        return await self._execute(
            "delete", sql, params, label,
            lambda values: self.backend.run(sql, values),
        )

    async def insert(
        self,
        sql: str,
        params: Sequence[Any] = (),
        label: Optional[str] = None,
    ) -> IdentifierReference:
        """
        Insert a row and return a reference to it.

        The new row id is requested through a RETURNING clause, except for
        the sequence table, whose statements run verbatim.
        """
        final_sql = sql if is_sequence_table_insert(sql) else f"{sql} RETURNING {ROW_ID_ATTR}"

        async def run(values: list) -> IdentifierReference:
            return IdentifierReference(await self.backend.run(final_sql, values))

        return await self._execute("insert", final_sql, params, label, run)

    async def update(
        self,
        sql: str,
        params: Sequence[Any] = (),
        id_field: Optional[str] = None,
        label: Optional[str] = None,
    ) -> list[dict]:
        """
        Run an update.

        Args:
            sql: UPDATE statement
            params: Values bound to the statement
            id_field: Column to return for every updated row, aliased as "id"
            label: Description for the log

        Returns:
            Rows produced by the statement (empty without id_field)
        """
        final_sql = f"{sql} RETURNING {id_field} AS id" if id_field else sql

        async def run(values: list) -> list[dict]:
            result = await self.backend.run(final_sql, values)
            return result.results

        return await self._execute("update", final_sql, params, label, run)

    async def get_auto_id(self, record_name: str) -> int:
        """Allocate the next id for a record name."""
        return await self.id_system.allocate(record_name)

    def map_to_db_field_type(self, field_type: str, collection: bool = False) -> str:
        """Map an abstract field type to a SQLite column type."""
        return map_type(field_type, collection)

    def parse_match_expression(
        self,
        key: str,
        value: Tuple[str, Any],
        field_name: str,
        field_type: str,
        is_reference_value: bool = False,
        get_reference_field_value: Optional[Callable[[str], str]] = None,
        p: Callable[[], str] = qmark,
    ) -> Optional[MatchFragment]:
        """
        Translate a match expression this backend handles specially.

        Returns None for anything but "contains" on JSON columns, so the
        caller falls back to its generic translation.
        """
        return translate_contains(field_name, field_type, value, p)
