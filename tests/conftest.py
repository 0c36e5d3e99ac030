import sqlite3
import pytest
from pathlib import Path

from airport_db.queries import AirportQueries
from airport_db.storage import NativeConnectionManager

ASSETS_DIR = Path(__file__).parent / 'assets'


@pytest.fixture
def test_assets_dir() -> Path:
    """Return the path to the test assets directory."""
    return ASSETS_DIR


@pytest.fixture
def make_database(tmp_path):
    """Return a function building a database with the airports schema and the given SQL."""
    def _make(*scripts: str, name: str = 'airports.sqlite') -> Path:
        path = tmp_path / name
        connection = sqlite3.connect(str(path))
        try:
            connection.executescript((ASSETS_DIR / 'schema.sql').read_text())
            for script in scripts:
                connection.executescript(script)
            connection.commit()
        finally:
            connection.close()
        return path
    return _make


@pytest.fixture
def database_path(make_database) -> Path:
    """Database holding the sample airports from assets/airports.sql."""
    return make_database((ASSETS_DIR / 'airports.sql').read_text())


@pytest.fixture
def database_bytes(database_path) -> bytes:
    return database_path.read_bytes()


@pytest.fixture
def manager(database_path):
    manager = NativeConnectionManager(database_path)
    yield manager
    manager.close_database()


@pytest.fixture
def queries(manager) -> AirportQueries:
    return AirportQueries(manager)
