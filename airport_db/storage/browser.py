#!/usr/bin/env python3

import asyncio
import logging
import sqlite3
import sys
from typing import Awaitable, Callable, Optional

import requests

from ..exceptions import DatabaseNotInitializedError
from ..sources.assets import DatabaseInput, build_database_chain, make_session, resolve_wasm_url
from .base import ConnectionManager
from .sqlite import SqliteDatabase

logger = logging.getLogger(__name__)

EngineLoader = Callable[[str], Awaitable[None]]


async def load_engine(wasm_url: str) -> None:
    """
    Make the SQLite engine available to the interpreter.

    In-page interpreters ship ``sqlite3`` as a separately loaded package;
    on a regular CPython build it is already compiled in.
    """
    if sys.platform == "emscripten":
        import pyodide_js
        await pyodide_js.loadPackage(wasm_url)
        logger.info(f"Loaded SQLite engine from {wasm_url}")
    else:
        logger.debug(f"SQLite engine is built in, not loading {wasm_url}")


class BrowserDatabase(SqliteDatabase):
    """In-memory connection holding a copy of the database bytes."""

    def __init__(self, connection: sqlite3.Connection, size: int, engine_url: Optional[str] = None):
        super().__init__(connection)
        self.size = size
        self.engine_url = engine_url

    @classmethod
    def from_bytes(cls, data: bytes, engine_url: Optional[str] = None) -> 'BrowserDatabase':
        connection = sqlite3.connect(":memory:")
        try:
            connection.deserialize(data)
            return cls(connection, len(data), engine_url)
        except sqlite3.Error:
            connection.close()
            raise


class BrowserConnectionManager(ConnectionManager):
    """
    Connection owner for the in-page runtime.

    Unlike the native manager it cannot open lazily: fetching the database
    is asynchronous, so ``initialize`` has to be awaited before any query.
    Concurrent ``initialize`` calls share one in-flight open.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 engine_loader: EngineLoader = load_engine):
        super().__init__()
        self.session = session or make_session()
        self._engine_loader = engine_loader
        self._opening: Optional[asyncio.Future] = None

    async def initialize(self, database: Optional[DatabaseInput] = None,
                         wasm_url: Optional[str] = None) -> None:
        """
        Load the engine and the database bytes, then open the connection.

        Does nothing if a connection is already open. A call made while
        another one is still opening waits for that one instead.

        Args:
            database: Raw database bytes, a URL to fetch, or None to use the
                CDN copy with the bundled copy as fallback
            wasm_url: Location of the SQLite engine package
        """
        if self._database is not None:
            return

        if self._opening is None:
            self._opening = asyncio.ensure_future(self._open(database, wasm_url))
            self._opening.add_done_callback(self._opened)
        await self._opening

    def _opened(self, future: asyncio.Future) -> None:
        self._opening = None

    async def _open(self, database: Optional[DatabaseInput], wasm_url: Optional[str]) -> None:
        engine_url = resolve_wasm_url(wasm_url)
        await self._engine_loader(engine_url)

        chain = build_database_chain(database, session=self.session)
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, chain.resolve)

        self._set_database(BrowserDatabase.from_bytes(data, engine_url))
        logger.info(f"Opened in-memory airports database ({len(data)} bytes)")

    def get_database(self) -> BrowserDatabase:
        """
        Return the open connection.

        Raises:
            DatabaseNotInitializedError: If ``initialize`` has not completed
        """
        if self._database is None:
            raise DatabaseNotInitializedError()
        return self._database
