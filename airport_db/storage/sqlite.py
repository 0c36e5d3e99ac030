import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from .base import QueryDatabase, QueryStatement, Row


class SqliteStatement(QueryStatement):
    """
    Statement backed by a ``sqlite3`` connection.

    Each call opens a cursor and closes it again on every exit path,
    including errors raised while binding or stepping.
    """

    def __init__(self, connection: sqlite3.Connection, sql: str):
        self._connection = connection
        self.sql = sql

    @contextmanager
    def _cursor(self, params) -> Iterator[sqlite3.Cursor]:
        cursor = self._connection.cursor()
        try:
            cursor.execute(self.sql, params)
            yield cursor
        finally:
            cursor.close()

    @staticmethod
    def _to_row(cursor: sqlite3.Cursor, values: tuple) -> Row:
        return {column[0]: value for column, value in zip(cursor.description, values)}

    def get(self, *params: Any) -> Optional[Row]:
        with self._cursor(params) as cursor:
            values = cursor.fetchone()
            if values is None:
                return None
            return self._to_row(cursor, values)

    def all(self, *params: Any) -> List[Row]:
        with self._cursor(params) as cursor:
            return [self._to_row(cursor, values) for values in cursor.fetchall()]


class SqliteDatabase(QueryDatabase):
    """``QueryDatabase`` over an already opened ``sqlite3`` connection."""

    def __init__(self, connection: sqlite3.Connection):
        self._connection = connection
        self._connection.execute("PRAGMA query_only = ON")

    def prepare(self, sql: str) -> SqliteStatement:
        return SqliteStatement(self._connection, sql)

    def close(self) -> None:
        self._connection.close()
