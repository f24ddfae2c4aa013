"""
SQLite backend using aiosqlite.

Exposes the D1-style statement contract over a local SQLite file:
- ? placeholders
- RETURNING clauses (SQLite >= 3.35)
- JSON1 functions such as json_each
"""

import asyncio
import logging
import sqlite3
import time
from pathlib import Path
from typing import Optional, List, Any, Sequence

from storekit.db.interface import Backend
from storekit.errors import BackendExecutionError
from storekit.models.result import ExecutionResult, ResultMeta

logger = logging.getLogger(__name__)

try:
    import aiosqlite
    HAS_AIOSQLITE = True
except ImportError:
    HAS_AIOSQLITE = False
    aiosqlite = None

MEMORY_PATH = ":memory:"


class SQLiteBackend(Backend):
    """
    SQLite backend.

    Uses aiosqlite for async database operations.
    Automatically creates the database file and parent directories.
    Statements on the shared connection run one at a time, and every
    data-changing statement is committed before the next one starts.
    """

    def __init__(self, db_path: str = "~/.storekit/storekit.db"):
        """
        Initialize SQLite backend.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
                    Supports ~ expansion for home directory.
        """
        if not HAS_AIOSQLITE:
            raise RuntimeError(
                "aiosqlite not installed. Run: pip install storekit"
            )

        self.db_path = db_path if db_path == MEMORY_PATH else Path(db_path).expanduser()
        self._conn: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """
        Initialize database connection and create file if needed.

        The connection is only kept once its PRAGMAs have run, so a
        failed connect leaves the backend unconnected.

        Raises:
            BackendExecutionError: If the file cannot be opened or set up
        """
        if self._conn is not None:
            return

        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        pragmas = ["PRAGMA foreign_keys = ON"]
        if isinstance(self.db_path, Path):
            pragmas.append("PRAGMA journal_mode = WAL")

        try:
            conn = await aiosqlite.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise BackendExecutionError(str(e)) from e

        try:
            for pragma in pragmas:
                # An open PRAGMA cursor keeps a lock other connections wait on
                async with conn.execute(pragma):
                    pass
        except sqlite3.Error as e:
            await conn.close()
            raise BackendExecutionError(str(e), sql=pragma, params=[]) from e

        conn.row_factory = aiosqlite.Row
        self._conn = conn

        logger.info(f"SQLite database connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite connection closed")

    async def _get_conn(self) -> aiosqlite.Connection:
        """Get or create connection."""
        if self._conn is None:
            await self.connect()
        return self._conn

    async def all(self, sql: str, params: Sequence[Any] = ()) -> List[dict]:
        """Fetch rows as list of dicts."""
        async with self._lock:
            conn = await self._get_conn()
            try:
                async with conn.execute(sql, tuple(params)) as cursor:
                    rows = await cursor.fetchall()
            except sqlite3.Error as e:
                raise BackendExecutionError(str(e), sql=sql, params=list(params)) from e

        return [dict(row) for row in rows]

    async def run(self, sql: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """Execute statement, commit, and return rows plus write metadata."""
        async with self._lock:
            conn = await self._get_conn()
            started = time.perf_counter()
            try:
                async with conn.execute(sql, tuple(params)) as cursor:
                    # RETURNING rows must be consumed before the commit
                    rows = await cursor.fetchall()
                    changes = cursor.rowcount
                    last_row_id = cursor.lastrowid
                await conn.commit()
            except sqlite3.Error as e:
                await conn.rollback()
                raise BackendExecutionError(str(e), sql=sql, params=list(params)) from e

            meta = ResultMeta(
                changes=max(changes, 0),
                last_row_id=last_row_id or None,
                duration_ms=(time.perf_counter() - started) * 1000,
            )

        return ExecutionResult(results=[dict(row) for row in rows], meta=meta)

    @property
    def supports_drop(self) -> bool:
        """SQLite can enumerate and drop its own tables."""
        return True

    async def drop_all_tables(self) -> None:
        """Drop every table except SQLite's internal ones."""
        tables = await self.all(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
        )
        await self.run("PRAGMA foreign_keys = OFF")
        for row in tables:
            await self.run(f'DROP TABLE IF EXISTS "{row["name"]}"')
        await self.run("PRAGMA foreign_keys = ON")

        logger.info(f"Dropped {len(tables)} tables from {self.db_path}")
