#!/usr/bin/env python3

import logging
import os
import sqlite3
from importlib import resources
from pathlib import Path
from typing import Optional, Union

from .. import config
from ..exceptions import AssetResolutionError
from ..sources.fallback import FallbackChain, Strategy
from .base import ConnectionManager
from .sqlite import SqliteDatabase

logger = logging.getLogger(__name__)


class NativeDatabase(SqliteDatabase):
    """Read-only connection to the database file on disk."""

    def __init__(self, connection: sqlite3.Connection, path: Path):
        super().__init__(connection)
        self.path = path

    @classmethod
    def open(cls, path: Union[str, Path]) -> 'NativeDatabase':
        path = Path(path).resolve()
        connection = sqlite3.connect(f"{path.as_uri()}?mode=ro", uri=True)
        return cls(connection, path)


class _ExistingFile(Strategy[Path]):
    """A candidate database location that is accepted only if the file exists."""

    def __init__(self, label: str, path: Path):
        self.label = label
        self.path = Path(path)

    @property
    def name(self) -> str:
        return f"{self.label} ({self.path})"

    def load(self) -> Path:
        if not self.path.is_file():
            raise FileNotFoundError(f"Database file not found: {self.path}")
        return self.path


class NativeConnectionManager(ConnectionManager):
    """
    Lazily opens the airports database file for the native runtime.

    A ``database_path`` given by the caller is the only location tried.
    Otherwise the file is located by trying, in order:

    1. the ``AIRPORT_DB_PATH`` environment variable
    2. the copy shipped as package data (``airport_db/data/airports.sqlite``)
    3. the development checkout ``../airport-db-data-sqlite/data/airports.sqlite``
    """

    def __init__(self, database_path: Optional[Union[str, Path]] = None):
        super().__init__()
        self.database_path = database_path

    def _candidates(self):
        if self.database_path:
            yield _ExistingFile('given path', Path(self.database_path))
            return
        configured = os.getenv(config.DATABASE_PATH_ENV)
        if configured:
            yield _ExistingFile('configured path', Path(configured))
        package_root = resources.files('airport_db')
        yield _ExistingFile('package data', Path(str(package_root.joinpath(config.BUNDLED_DATABASE_RESOURCE))))
        repo_root = Path(__file__).resolve().parent.parent.parent
        yield _ExistingFile(
            'development path',
            repo_root.parent / config.DEVELOPMENT_DATABASE_DIR / 'data' / 'airports.sqlite',
        )

    def resolve_database_path(self) -> Path:
        """
        Locate the database file.

        Raises:
            AssetResolutionError: If no candidate location holds the file
        """
        chain = FallbackChain(list(self._candidates()), recoverable=(FileNotFoundError,))
        try:
            return chain.resolve()
        except FileNotFoundError as e:
            raise AssetResolutionError(chain.attempted) from e

    def get_database(self) -> NativeDatabase:
        """Return the open connection, opening it on first use."""
        if self._database is None:
            path = self.resolve_database_path()
            logger.info(f"Opening airports database {path} (read-only)")
            self._set_database(NativeDatabase.open(path))
        return self._database
