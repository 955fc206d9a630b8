"""Protocols every database driver implements.

These protocols let application code switch backends without changing call
sites. A backend provides one class per protocol; nothing is shared through
inheritance.

Ownership runs Driver -> Connection -> Statement -> ResultSet. A statement
keeps a non-owning reference to the connection that prepared it and must not
be used after that connection is closed.
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..domain.models import Value, ValueKind


@runtime_checkable
class ResultSet(Protocol):
    """Forward-only cursor over a fully materialized set of rows.

    States: before first row -> on row -> exhausted. Exhausted is terminal.
    """

    def next(self) -> bool:
        """Advance to the next row.

        Returns:
            True if a row is now positioned, False once the rows are used up
            (and on every later call)
        """
        ...

    def get_string(self, index: int) -> Optional[str]:
        """Return column ``index`` (1-based) of the current row as text."""
        ...

    def get_i32(self, index: int) -> Optional[int]:
        """Return column ``index`` (1-based) as a signed 32-bit integer."""
        ...

    def get_u32(self, index: int) -> Optional[int]:
        """Return column ``index`` (1-based) as an unsigned 32-bit integer."""
        ...

    def get_value(self, index: int, kind: ValueKind) -> Optional[Value]:
        """Return column ``index`` (1-based) wrapped as a :class:`Value`."""
        ...


@runtime_checkable
class Statement(Protocol):
    """A prepared statement holding SQL already rewritten for its backend."""

    @property
    def sql(self) -> str:
        """Rewritten SQL text sent to the backend."""
        ...

    @property
    def parameter_count(self) -> int:
        """Number of placeholders found while preparing."""
        ...

    def execute_query(self, params: Sequence[Value] = ()) -> ResultSet:
        """Execute and materialize every returned row.

        Raises:
            ExecutionError: If the backend rejects the statement or parameters
        """
        ...

    def execute_update(self, params: Sequence[Value] = ()) -> int:
        """Execute and return the number of affected rows.

        Raises:
            ExecutionError: If the backend rejects the statement or parameters
        """
        ...


@runtime_checkable
class Connection(Protocol):
    """A live session with a backend."""

    @property
    def closed(self) -> bool:
        ...

    def prepare(self, sql: str) -> Statement:
        """Rewrite ``?`` placeholders and return a statement. Does not execute.

        Raises:
            SqlSyntaxError: If the SQL cannot be tokenized
        """
        ...

    def close(self) -> None:
        """Close the session. Statements prepared from it become unusable."""
        ...


@runtime_checkable
class Driver(Protocol):
    """Entry point for a backend."""

    def connect(self, url: str) -> Connection:
        """Open a new connection. Failures are not retried.

        Raises:
            ConnectError: If the backend is unreachable or rejects the login
        """
        ...
