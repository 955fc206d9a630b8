"""PostgreSQL driver built on a SQLAlchemy engine and psycopg 3.

SQLAlchemy parses the URL and opens the session; statements then run on the
underlying psycopg connection through a ``RawCursor``, which takes
PostgreSQL's native ``$1``-style placeholders produced by the rewriter.
Sessions run in autocommit mode: transaction management is left to the SQL
the caller sends.
"""
from __future__ import annotations

import threading
from logging import Logger
from typing import Any, Optional, Sequence

import psycopg
from psycopg import RawCursor
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection as SAConnection, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from ..domain.models import Value
from ..errors import ConnectError, ConnectionBusyError, ExecutionError
from ..log.logger import get_logger
from ..sql.dialects import Dialect
from ..sql.rewriter import rewrite_with_count
from .marshalling import to_native
from .result_set import MaterializedResultSet

SQLALCHEMY_DRIVERNAME = "postgresql+psycopg"
_ACCEPTED_DRIVERNAMES = {"postgres", "postgresql", SQLALCHEMY_DRIVERNAME}


def _diagnostic(exc: BaseException) -> str:
    """Return the backend's own message for a wrapped exception."""
    orig = getattr(exc, "orig", None)
    text = str(orig if orig is not None else exc).strip()
    return text or exc.__class__.__name__


def normalize_url(url: str) -> URL:
    """Parse a PostgreSQL URL and point it at the psycopg 3 dialect.

    Args:
        url: ``postgres://``, ``postgresql://`` or ``postgresql+psycopg://`` URL

    Returns:
        SQLAlchemy URL using the ``postgresql+psycopg`` driver

    Raises:
        ConnectError: If the URL is malformed or names another backend/driver
    """
    try:
        parsed = make_url(url)
    except ArgumentError as exc:
        raise ConnectError(f"Invalid connection URL: {exc}") from exc

    if parsed.drivername not in _ACCEPTED_DRIVERNAMES:
        raise ConnectError(
            f"Unsupported URL scheme {parsed.drivername!r} for the PostgreSQL driver"
        )
    return parsed.set(drivername=SQLALCHEMY_DRIVERNAME)


class PostgresStatement:
    """Prepared statement bound to the connection that created it."""

    def __init__(
        self,
        connection: "PostgresConnection",
        sql: str,
        parameter_count: int,
        logger: Logger,
    ) -> None:
        self._connection = connection
        self._sql = sql
        self._parameter_count = parameter_count
        self.logger = logger

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def parameter_count(self) -> int:
        return self._parameter_count

    def execute_query(self, params: Sequence[Value] = ()) -> MaterializedResultSet:
        rows, column_names, _ = self._connection._run(self._sql, to_native(params))
        self.logger.debug("Query returned %s rows", len(rows))
        return MaterializedResultSet(rows, column_names)

    def execute_update(self, params: Sequence[Value] = ()) -> int:
        _, _, rowcount = self._connection._run(self._sql, to_native(params))
        self.logger.debug("Update affected %s rows", rowcount)
        return rowcount


class PostgresConnection:
    """One live PostgreSQL session.

    Statements hold a back-reference to this object. An execution lock makes
    sure only one statement runs on the session at a time; a second attempt
    fails with :class:`ConnectionBusyError` instead of waiting.
    """

    def __init__(self, engine: Engine, connection: SAConnection, logger: Logger) -> None:
        """Initialize connection wrapper.

        Args:
            engine: Engine that owns the session (disposed on close)
            connection: Open SQLAlchemy connection
            logger: Logger instance
        """
        self._engine = engine
        self._connection = connection
        self._exec_lock = threading.Lock()
        self.logger = logger

    @property
    def closed(self) -> bool:
        return self._connection.closed

    def prepare(self, sql: str) -> PostgresStatement:
        rewritten = rewrite_with_count(sql, Dialect.POSTGRES)
        self.logger.debug(
            "Prepared %r with %s placeholders", rewritten.sql, rewritten.parameter_count
        )
        return PostgresStatement(
            self, rewritten.sql, rewritten.parameter_count, self.logger
        )

    def _run(
        self, sql: str, params: list[Any]
    ) -> tuple[list[tuple[Any, ...]], tuple[str, ...], int]:
        """Execute SQL with native parameters on the psycopg connection.

        Returns:
            Tuple of (rows, column names, affected row count); rows and names
            are empty for statements that return no result

        Raises:
            ExecutionError: If the connection is closed or the backend fails
            ConnectionBusyError: If another statement is mid-execution
        """
        if self.closed:
            raise ExecutionError("Connection is closed", sql=sql)
        if not self._exec_lock.acquire(blocking=False):
            raise ConnectionBusyError("Connection is busy executing another statement", sql=sql)

        try:
            driver_connection = self._connection.connection.driver_connection
            with RawCursor(driver_connection) as cursor:
                cursor.execute(sql, params or None)
                if cursor.description is None:
                    rows: list[tuple[Any, ...]] = []
                    column_names: tuple[str, ...] = ()
                else:
                    rows = cursor.fetchall()
                    column_names = tuple(column.name for column in cursor.description)
                rowcount = max(cursor.rowcount, 0)
        except (psycopg.Error, SQLAlchemyError) as exc:
            self.logger.error("Statement failed: %s", _diagnostic(exc))
            raise ExecutionError(f"Statement failed: {_diagnostic(exc)}", sql=sql) from exc
        finally:
            self._exec_lock.release()

        return rows, column_names, rowcount

    def close(self) -> None:
        """Close the session and dispose of its engine."""
        if self.closed:
            return
        try:
            self._connection.close()
        finally:
            self._engine.dispose()
        self.logger.info("Connection closed")

    def __enter__(self) -> "PostgresConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class PostgresDriver:
    """Driver opening :class:`PostgresConnection` sessions.

    Each ``connect`` call builds its own engine with ``NullPool``; nothing is
    pooled or retried.
    """

    def __init__(self, logger: Optional[Logger] = None, **engine_options: Any) -> None:
        """Initialize driver.

        Args:
            logger: Logger instance (defaults to the package logger)
            **engine_options: Extra keyword arguments for ``create_engine``
        """
        self.logger = logger or get_logger()
        self._engine_options = engine_options

    def connect(self, url: str) -> PostgresConnection:
        sa_url = normalize_url(url)
        safe_url = sa_url.render_as_string(hide_password=True)

        try:
            engine = create_engine(
                sa_url,
                poolclass=NullPool,
                isolation_level="AUTOCOMMIT",
                **self._engine_options,
            )
        except (ArgumentError, SQLAlchemyError) as exc:
            raise ConnectError(f"Cannot create engine for {safe_url}: {_diagnostic(exc)}") from exc

        try:
            connection = engine.connect()
        except SQLAlchemyError as exc:
            engine.dispose()
            self.logger.error("Connection to %s failed: %s", safe_url, _diagnostic(exc))
            raise ConnectError(f"Cannot connect to {safe_url}: {_diagnostic(exc)}") from exc

        self.logger.info("Connected to %s", safe_url)
        return PostgresConnection(engine, connection, self.logger)
