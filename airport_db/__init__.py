"""
Typed, read-only access to the airport reference database.

The main public API includes:
- get_airport_by_icao / get_airport_by_iata / get_airport_by_faa: single lookups
- get_airports_by_country / _by_state / _by_city / _by_type, get_airports_with_towers
- search_airports: multi-criteria search capped at 100 results
- count_airports
- get_database / close_database: lifecycle of the shared read-only connection

The in-page runtime exposes the same functions from ``airport_db.browser``.
"""

from .exceptions import (
    AirportDbError,
    AssetFetchError,
    AssetResolutionError,
    CorsOrNetworkError,
    DatabaseNotInitializedError,
)
from .models import (
    Airport,
    AirportFrequencies,
    AirportIdentity,
    AirportInfrastructure,
    AirportLocation,
    AirportOperational,
    AirportStatus,
    AirportType,
    AirportTypeSource,
    Runway,
    RunwaySurface,
    SearchOptions,
)
from .queries import AirportQueries
from .storage import NativeConnectionManager

__version__ = '0.1.0'

_manager = NativeConnectionManager()
_queries = AirportQueries(_manager)

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

__all__ = [
    'Airport',
    'AirportIdentity',
    'AirportLocation',
    'AirportInfrastructure',
    'AirportOperational',
    'AirportFrequencies',
    'AirportType',
    'AirportTypeSource',
    'AirportStatus',
    'Runway',
    'RunwaySurface',
    'SearchOptions',
    'AirportQueries',
    'NativeConnectionManager',
    'AirportDbError',
    'AssetFetchError',
    'AssetResolutionError',
    'CorsOrNetworkError',
    'DatabaseNotInitializedError',
    'get_database',
    'close_database',
    'get_airport_by_icao',
    'get_airport_by_iata',
    'get_airport_by_faa',
    'get_airports_by_country',
    'get_airports_by_state',
    'get_airports_by_city',
    'get_airports_by_type',
    'get_airports_with_towers',
    'search_airports',
    'count_airports',
]
