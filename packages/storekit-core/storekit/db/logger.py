"""
Database loggers.

The adapter reports every statement attempt to a DatabaseLogger. The
default implementation forwards events to the standard logging module.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from storekit.models.log_event import LogEvent

logger = logging.getLogger("storekit.db")


class DatabaseLogger(ABC):
    """Sink for database operation events."""

    @abstractmethod
    def info(self, event: LogEvent) -> None:
        """Record an operation attempt."""
        pass

    @abstractmethod
    def error(self, event: LogEvent) -> None:
        """Record an operation failure."""
        pass


class LoggingDatabaseLogger(DatabaseLogger):
    """
    Forward events to a standard library logger.

    The event fields are attached to each record under ``extra`` so
    structured handlers can pick them up.
    """

    def __init__(self, target: logging.Logger | None = None, include_params: bool = True):
        """
        Args:
            target: Logger to write to. Defaults to the "storekit.db" logger.
            include_params: Whether bound parameters appear in log output
        """
        self.target = target or logger
        self.include_params = include_params

    def _extra(self, event: LogEvent) -> dict:
        data = event.to_dict()
        if not self.include_params:
            data.pop("params", None)
        return {"db_event": data}

    def _prefix(self, event: LogEvent) -> str:
        if event.context is not None:
            return f"[{event.context.request_id}] {event.kind}"
        return event.kind

    def info(self, event: LogEvent) -> None:
        message = f"{self._prefix(event)} {event.label}: {event.sql}"
        if self.include_params and event.params:
            message += f" -- params={event.params}"
        self.target.info(message, extra=self._extra(event))

    def error(self, event: LogEvent) -> None:
        message = f"{self._prefix(event)} {event.label} failed: {event.error} -- {event.sql}"
        if self.include_params and event.params:
            message += f" -- params={event.params}"
        self.target.error(message, extra=self._extra(event))


class NullDatabaseLogger(DatabaseLogger):
    """Discard every event."""

    def info(self, event: LogEvent) -> None:
        pass

    def error(self, event: LogEvent) -> None:
        pass


class RecordingDatabaseLogger(DatabaseLogger):
    """Keep events in memory, in emission order."""

    def __init__(self):
        self.events: List[LogEvent] = []

    def info(self, event: LogEvent) -> None:
        self.events.append(event)

    def error(self, event: LogEvent) -> None:
        self.events.append(event)

    @property
    def errors(self) -> List[LogEvent]:
        return [event for event in self.events if event.is_error]

    def clear(self) -> None:
        self.events.clear()
