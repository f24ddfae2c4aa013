"""
Per-name sequence allocation.

Each logical record type gets one row in the sequence table holding the
last id handed out. Allocation never reads and then writes: the
increment happens inside a single UPDATE ... RETURNING statement, so
concurrent callers can never observe the same value.
"""

import logging
import re
from typing import TYPE_CHECKING

from storekit.errors import BackendExecutionError

if TYPE_CHECKING:
    from storekit.db.database import Database

logger = logging.getLogger(__name__)

SEQUENCE_TABLE = "_IDS_"

_INSERT_TARGET = re.compile(
    r"^\s*INSERT\s+(?:OR\s+\w+\s+)?INTO\s+(?:[\"`\[]?\w+[\"`\]]?\.)?[\"`\[]?(\w+)[\"`\]]?",
    re.IGNORECASE,
)


def is_sequence_table_insert(sql: str) -> bool:
    """Check if an INSERT statement targets the sequence table."""
    match = _INSERT_TARGET.match(sql)
    return match is not None and match.group(1) == SEQUENCE_TABLE


class SequenceAllocator:
    """
    Allocates 1, 2, 3, ... per record name.

    Statements go through the owning Database so they are coerced and
    logged like any other operation.
    """

    def __init__(self, db: "Database"):
        self.db = db

    async def setup(self):
        """Create the sequence table if it does not exist."""
        return await self.db.scheme(
            f"CREATE TABLE IF NOT EXISTS {SEQUENCE_TABLE} (last INTEGER, name TEXT)",
            "create sequence table",
        )

    async def current(self, record_name: str) -> int:
        """Return the last allocated id for a name, 0 if none."""
        rows = await self.db.query(
            f"SELECT last FROM {SEQUENCE_TABLE} WHERE name = ?",
            [record_name],
            f"finding last id of {record_name}",
        )
        return rows[0]["last"] if rows else 0

    async def _increment(self, record_name: str) -> int | None:
        rows = await self.db.update(
            f"UPDATE {SEQUENCE_TABLE} SET last = last + 1 WHERE name = ?",
            [record_name],
            id_field="last",
            label=f"increment last id of {record_name}",
        )
        return rows[0]["id"] if rows else None

    async def allocate(self, record_name: str) -> int:
        """
        Allocate the next id for a record name.

        Args:
            record_name: Logical record type, e.g. "Order"

        Returns:
            The newly allocated id

        Raises:
            BackendExecutionError: If the backend rejects a statement
        """
        new_id = await self._increment(record_name)
        if new_id is not None:
            return new_id

        # First allocation for this name. The insert only happens if no
        # other caller created the row in the meantime.
        created = await self.db.insert(
            f"INSERT INTO {SEQUENCE_TABLE} (name, last) "
            f"SELECT ?, 1 WHERE NOT EXISTS (SELECT 1 FROM {SEQUENCE_TABLE} WHERE name = ?)",
            [record_name, record_name],
            f"set last id for {record_name}: 1",
        )
        if created.result.meta.changes:
            return 1

        logger.debug(f"Sequence row for {record_name} created concurrently, retrying increment")
        new_id = await self._increment(record_name)
        if new_id is None:
            raise BackendExecutionError(
                f"sequence row for {record_name} is missing after creation",
                sql=f"UPDATE {SEQUENCE_TABLE}",
                params=[record_name],
            )
        return new_id
