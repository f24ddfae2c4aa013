"""
Pytest configuration and fixtures for storekit tests.
"""

import pytest
import sys
from pathlib import Path

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "storekit-core"))

from storekit.db.interface import Backend  # noqa: E402
from storekit.errors import BackendExecutionError  # noqa: E402
from storekit.models.result import ExecutionResult, ResultMeta  # noqa: E402


class FakeBackend(Backend):
    """
    Backend double that records statements instead of executing them.

    ``rows`` is returned from every call; set ``fail_with`` to make the
    next call raise.
    """

    def __init__(self, rows=None, changes=0, last_row_id=None):
        self.calls = []
        self.rows = rows or []
        self.changes = changes
        self.last_row_id = last_row_id
        self.fail_with = None
        self.closed = False

    async def connect(self):
        pass

    async def close(self):
        self.closed = True

    def _record(self, method, sql, params):
        self.calls.append((method, sql, list(params)))
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    async def all(self, sql, params=()):
        self._record("all", sql, params)
        return list(self.rows)

    async def run(self, sql, params=()):
        self._record("run", sql, params)
        return ExecutionResult(
            results=list(self.rows),
            meta=ResultMeta(changes=self.changes, last_row_id=self.last_row_id),
        )


@pytest.fixture
def fake_backend():
    """Backend double with no rows."""
    return FakeBackend()


@pytest.fixture
def backend_error():
    """A backend failure as the SQLite backend would raise it."""
    return BackendExecutionError("no such table: missing", sql="SELECT * FROM missing", params=[])


@pytest.fixture
async def sqlite_backend(tmp_path):
    """Connected SQLite backend on a temporary file."""
    from storekit.db.sqlite import SQLiteBackend

    backend = SQLiteBackend(str(tmp_path / "test.db"))
    await backend.connect()
    yield backend
    await backend.close()


@pytest.fixture
async def database(sqlite_backend):
    """Opened Database on a temporary SQLite file, recording its log events."""
    from storekit.db.database import Database
    from storekit.db.logger import RecordingDatabaseLogger
    from storekit.models.context import RequestContext

    db = Database(
        sqlite_backend,
        logger=RecordingDatabaseLogger(),
        context=RequestContext(request_id="req-test"),
    )
    await db.open()
    return db
