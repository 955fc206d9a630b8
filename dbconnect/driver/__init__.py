"""Database drivers.

The PostgreSQL driver is the only backend shipped.
"""

from .base import Connection, Driver, ResultSet, Statement
from .marshalling import from_native, to_native
from .postgres import PostgresConnection, PostgresDriver, PostgresStatement
from .registry import connect, get_driver, register_driver
from .result_set import CursorState, MaterializedResultSet
from .shared import SharedConnection

__all__ = [
    'Connection',
    'CursorState',
    'Driver',
    'MaterializedResultSet',
    'PostgresConnection',
    'PostgresDriver',
    'PostgresStatement',
    'ResultSet',
    'SharedConnection',
    'Statement',
    'connect',
    'from_native',
    'get_driver',
    'register_driver',
    'to_native',
]
