"""
Tests for storekit data models.
"""

import pytest


class TestIdentifierReference:
    """Tests for IdentifierReference."""

    def test_id_from_returning_row(self):
        """Test the RETURNING column wins over backend metadata."""
        from storekit.models.result import ExecutionResult, IdentifierReference, ResultMeta

        ref = IdentifierReference(
            ExecutionResult(results=[{"_rowId": 7}], meta=ResultMeta(last_row_id=3))
        )

        assert ref.id == 7
        assert bool(ref) is True

    def test_id_from_last_row_id(self):
        """Test the backend's last row id is used without RETURNING rows."""
        from storekit.models.result import ExecutionResult, IdentifierReference, ResultMeta

        ref = IdentifierReference(ExecutionResult(meta=ResultMeta(changes=1, last_row_id=5)))

        assert ref.id == 5

    def test_empty_reference_is_falsy(self):
        from storekit.models.result import ExecutionResult, IdentifierReference

        ref = IdentifierReference(ExecutionResult())

        assert ref.id is None
        assert not ref

    def test_to_dict(self):
        """Test serialization to dict."""
        from storekit.models.result import ExecutionResult, IdentifierReference

        ref = IdentifierReference(ExecutionResult(results=[{"_rowId": 1}]))
        result = ref.to_dict()

        assert result["id"] == 1
        assert result["success"] is True
        assert result["meta"]["changes"] == 0


class TestLogEvent:
    """Tests for LogEvent model."""

    def test_defaults(self):
        from storekit.models.log_event import LogEvent

        event = LogEvent(kind="query", sql="SELECT 1")

        assert event.label == ""
        assert event.params is None
        assert event.is_error is False

    def test_invalid_kind(self):
        """Test only known operation kinds are accepted."""
        from storekit.models.log_event import LogEvent

        with pytest.raises(ValueError):
            LogEvent(kind="select", sql="SELECT 1")

    def test_with_error_copies_fields(self):
        from storekit.models.context import RequestContext
        from storekit.models.log_event import LogEvent

        event = LogEvent(
            kind="update", sql="UPDATE t SET a = ?", label="x", params=[1],
            context=RequestContext(request_id="r"),
        )
        failed = event.with_error(ValueError("bad"))

        assert failed.error == "bad"
        assert failed.is_error is True
        assert failed.params == [1]
        assert failed.context == event.context
        assert event.error is None

    def test_to_dict(self):
        from storekit.models.context import RequestContext
        from storekit.models.log_event import LogEvent

        event = LogEvent(kind="delete", sql="DELETE FROM t", params=[], context=RequestContext(request_id="r"))

        assert event.to_dict() == {
            "type": "delete",
            "name": "",
            "sql": "DELETE FROM t",
            "params": [],
            "request_id": "r",
        }


class TestRequestContext:
    """Tests for RequestContext."""

    def test_request_ids_are_unique(self):
        from storekit.models.context import RequestContext

        assert RequestContext().request_id != RequestContext().request_id

    def test_to_dict(self):
        from storekit.models.context import RequestContext

        assert RequestContext(request_id="abc").to_dict() == {"request_id": "abc"}
