"""
Library surface for the in-page runtime.

Same query functions as the top-level package, backed by an in-memory copy
of the database. ``initialize_browser_database`` must be awaited first:

    await initialize_browser_database()
    airport = get_airport_by_icao("KJFK")
"""

from typing import Optional

from .queries import AirportQueries
from .sources.assets import DatabaseInput
from .storage.browser import BrowserConnectionManager

_manager = BrowserConnectionManager()
_queries = AirportQueries(_manager)


async def initialize_browser_database(database: Optional[DatabaseInput] = None,
                                      wasm_url: Optional[str] = None) -> None:
    """
    Fetch the database and open the shared in-memory connection.

    Args:
        database: Raw database bytes, a URL to fetch, or None for the CDN
            copy with the bundled copy as fallback
        wasm_url: Location of the SQLite engine package, defaults to the bundled one
    """
    await _manager.initialize(database=database, wasm_url=wasm_url)


def is_browser_database_initialized() -> bool:
    return _manager.is_open


get_database = _manager.get_database
close_database = _manager.close_database

get_airport_by_icao = _queries.get_airport_by_icao
get_airport_by_iata = _queries.get_airport_by_iata
get_airport_by_faa = _queries.get_airport_by_faa
get_airports_by_country = _queries.get_airports_by_country
get_airports_by_state = _queries.get_airports_by_state
get_airports_by_city = _queries.get_airports_by_city
get_airports_by_type = _queries.get_airports_by_type
get_airports_with_towers = _queries.get_airports_with_towers
search_airports = _queries.search_airports
count_airports = _queries.count_airports
