"""Error taxonomy shared by all drivers.

Backend failures are wrapped into these types with ``raise ... from exc`` so
callers never have to catch vendor exceptions. Nothing in this package retries.
"""
from __future__ import annotations

from typing import Optional


class DriverError(Exception):
    """Base class for every error raised by the connectivity layer."""

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.sql = sql

    def __str__(self) -> str:
        if self.sql is None:
            return self.message
        return f"{self.message} (sql: {self.sql!r})"


class ConnectError(DriverError):
    """The backend could not be reached or rejected the credentials."""


class SqlSyntaxError(DriverError):
    """SQL text could not be tokenized; it was never sent to the backend."""


class ExecutionError(DriverError):
    """The backend rejected a statement or its parameters."""


class ConnectionBusyError(ExecutionError):
    """A connection was used while another operation on it was in progress."""


class ColumnIndexError(DriverError, IndexError):
    """A 1-based column index does not address a column of the current row."""
