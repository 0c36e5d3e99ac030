"""
Database engines and connection lifecycle.

Both runtimes expose the same ``QueryDatabase`` interface; the query layer
never sees which one it is talking to.
"""

from .base import ConnectionManager, ConnectionState, QueryDatabase, QueryStatement
from .sqlite import SqliteDatabase, SqliteStatement
from .native import NativeConnectionManager, NativeDatabase
from .browser import BrowserConnectionManager, BrowserDatabase

__all__ = [
    'ConnectionManager',
    'ConnectionState',
    'QueryDatabase',
    'QueryStatement',
    'SqliteDatabase',
    'SqliteStatement',
    'NativeConnectionManager',
    'NativeDatabase',
    'BrowserConnectionManager',
    'BrowserDatabase',
]
