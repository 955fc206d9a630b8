"""
Backend-agnostic database connectivity.

Drivers open connections, connections prepare statements written with
neutral ``?`` placeholders, and statements execute with :class:`Value`
parameters.
"""
from .domain import Value, ValueKind
from .driver import (
    Connection,
    Driver,
    PostgresDriver,
    ResultSet,
    SharedConnection,
    Statement,
    connect,
    get_driver,
    register_driver,
)
from .errors import (
    ColumnIndexError,
    ConnectError,
    ConnectionBusyError,
    DriverError,
    ExecutionError,
    SqlSyntaxError,
)
from .sql import Dialect, rewrite

__all__ = [
    "ColumnIndexError",
    "ConnectError",
    "Connection",
    "ConnectionBusyError",
    "Dialect",
    "Driver",
    "DriverError",
    "ExecutionError",
    "PostgresDriver",
    "ResultSet",
    "SharedConnection",
    "SqlSyntaxError",
    "Statement",
    "Value",
    "ValueKind",
    "connect",
    "get_driver",
    "register_driver",
    "rewrite",
]
