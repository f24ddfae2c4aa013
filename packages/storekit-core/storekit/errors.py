"""
Exception types for storekit.

Backend failures are wrapped once, at the backend boundary, and then
propagate unchanged through the adapter.
"""


class StorekitError(Exception):
    """Base class for all storekit errors."""

    status_code = 500


class BackendExecutionError(StorekitError):
    """
    A statement failed inside the backend.

    Covers malformed statements, constraint violations and connectivity
    loss. The driver exception is kept as ``__cause__``.

    Attributes:
        sql: Statement text that was sent to the backend
        params: Parameters bound to the statement
    """

    def __init__(self, message: str, sql: str | None = None, params: list | None = None):
        super().__init__(message)
        self.sql = sql
        self.params = params


class InvalidParamSpecError(StorekitError, ValueError):
    """A data API parameter spec is malformed."""


class APINotFoundError(StorekitError):
    """No data API is registered under the requested name."""

    status_code = 404

    def __init__(self, name: str):
        super().__init__(f"api {name} not found")
        self.name = name


class UnauthorizedError(StorekitError):
    """The data API requires a user and none was supplied."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidParamsError(StorekitError):
    """A data API request body does not match the API's parameter spec."""

    status_code = 400
