import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class QueryStatement(ABC):
    """
    A reusable parameterized statement.

    Statements hold no engine resources between calls; every ``get`` or
    ``all`` acquires and releases its own cursor.
    """

    @abstractmethod
    def get(self, *params: Any) -> Optional[Row]:
        """
        Execute the statement and return the first row.

        Returns:
            The first matching row as a dictionary, or None if there is none
        """
        pass

    @abstractmethod
    def all(self, *params: Any) -> List[Row]:
        """
        Execute the statement and return every row, in store order unless
        the SQL specifies an ordering.
        """
        pass


class QueryDatabase(ABC):
    """Minimal engine interface the query layer is written against."""

    @abstractmethod
    def prepare(self, sql: str) -> QueryStatement:
        """Create a statement for ``sql``."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release all engine resources."""
        pass


class ConnectionState(Enum):
    """Lifecycle of a connection manager."""

    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


class ConnectionManager(ABC):
    """
    Owner of the single lazily opened database connection of a runtime.

    ``close_database`` is idempotent and the manager can be reopened
    after it was closed.
    """

    def __init__(self):
        self._database: Optional[QueryDatabase] = None
        self._state = ConnectionState.UNINITIALIZED

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._database is not None

    @abstractmethod
    def get_database(self) -> QueryDatabase:
        """Return the open connection."""
        pass

    def _set_database(self, database: QueryDatabase) -> QueryDatabase:
        self._database = database
        self._state = ConnectionState.OPEN
        return database

    def close_database(self) -> None:
        """Close the connection if one is open."""
        if self._database is None:
            return
        database, self._database = self._database, None
        self._state = ConnectionState.CLOSED
        database.close()
        logger.info(f"Closed airports database ({self.__class__.__name__})")
