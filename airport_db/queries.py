#!/usr/bin/env python3

"""
Record assembly over the airports database.

Every lookup first resolves airport keys, then assembles each key into a
full ``Airport`` from four scoped queries: identity, location,
infrastructure and operational data.
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Protocol

from . import config
from .models import (
    Airport,
    AirportFrequencies,
    AirportIdentity,
    AirportInfrastructure,
    AirportLocation,
    AirportOperational,
    SearchOptions,
)
from .storage.base import QueryDatabase

logger = logging.getLogger(__name__)

IDENTITY_SQL = """
    SELECT icao, iata, faa, local, name, type, type_source, status, is_public_use
    FROM airports WHERE id = ?
"""

LOCATION_SQL = """
    SELECT latitude, longitude, elevation_ft, country, country_code,
           state, county, city, zip, timezone, magnetic_variation
    FROM airports WHERE id = ?
"""

RUNWAYS_SQL = "SELECT id, length_ft, width_ft, surface, lighting FROM runways WHERE airport_id = ?"
TOWER_SQL = "SELECT has_tower FROM airports WHERE id = ?"
AMENITIES_SQL = "SELECT has_fbo, has_hangars, has_tie_downs FROM infrastructure WHERE airport_id = ?"
FUEL_SQL = "SELECT fuel_type FROM fuel_available WHERE airport_id = ?"
OPERATIONAL_SQL = "SELECT airac_cycle FROM operational WHERE airport_id = ?"
FREQUENCIES_SQL = """
    SELECT atis, tower, ground, clearance, unicom, approach, departure
    FROM frequencies WHERE airport_id = ?
"""


class DatabaseProvider(Protocol):
    """Anything that hands out the current ``QueryDatabase``, e.g. a ConnectionManager."""

    def get_database(self) -> QueryDatabase:
        ...


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class AirportQueries:
    """
    Read-only airport lookups written against ``QueryDatabase`` only.

    The database is fetched from the provider on every call so that a
    closed and reopened connection is picked up transparently.

    Example:
        queries = AirportQueries(NativeConnectionManager())
        airport = queries.get_airport_by_icao("KJFK")
    """

    def __init__(self, provider: DatabaseProvider):
        self.provider = provider

    @property
    def db(self) -> QueryDatabase:
        return self.provider.get_database()

    # ---- Assembly -----------------------------------------------------------

    def _get_infrastructure(self, db: QueryDatabase, airport_id: int) -> Optional[AirportInfrastructure]:
        # The tower flag row decides whether the airport has infrastructure at all
        tower_row = db.prepare(TOWER_SQL).get(airport_id)
        if tower_row is None:
            return None
        return AirportInfrastructure.from_rows(
            tower_row,
            db.prepare(RUNWAYS_SQL).all(airport_id),
            db.prepare(AMENITIES_SQL).get(airport_id),
            db.prepare(FUEL_SQL).all(airport_id),
        )

    def _get_operational(self, db: QueryDatabase, airport_id: int) -> Optional[AirportOperational]:
        row = db.prepare(OPERATIONAL_SQL).get(airport_id)
        if row is None:
            return None
        frequencies = db.prepare(FREQUENCIES_SQL).get(airport_id)
        return AirportOperational(
            airac_cycle=str(row['airac_cycle']),
            frequencies=AirportFrequencies.from_row(frequencies) if frequencies else None,
        )

    def _assemble(self, db: QueryDatabase, airport_id: int) -> Optional[Airport]:
        identity = db.prepare(IDENTITY_SQL).get(airport_id)
        location = db.prepare(LOCATION_SQL).get(airport_id)
        if identity is None or location is None:
            logger.debug(f"Airport id {airport_id} has no identity or location, skipping")
            return None

        return Airport(
            identity=AirportIdentity.from_row(identity),
            location=AirportLocation.from_row(location),
            infrastructure=self._get_infrastructure(db, airport_id) or AirportInfrastructure.empty(),
            operational=self._get_operational(db, airport_id),
        )

    def _assemble_all(self, icao_rows: List[dict]) -> List[Airport]:
        airports = []
        for row in icao_rows:
            airport = self.get_airport_by_icao(row['icao'])
            if airport is not None:
                airports.append(airport)
        return airports

    # ---- Single lookups -----------------------------------------------------

    def get_airport_by_icao(self, icao: str) -> Optional[Airport]:
        """
        Get an airport by ICAO code.

        The code is matched exactly as given.

        Returns:
            The assembled Airport, or None if there is no such airport
        """
        db = self.db
        row = db.prepare("SELECT id FROM airports WHERE icao = ?").get(icao)
        if row is None:
            return None
        return self._assemble(db, row['id'])

    def _get_by_secondary_code(self, column: str, code: str) -> Optional[Airport]:
        row = self.db.prepare(f"SELECT icao FROM airports WHERE {column} = ?").get(code)
        if row is None:
            return None
        return self.get_airport_by_icao(row['icao'])

    def get_airport_by_iata(self, iata: str) -> Optional[Airport]:
        """Get an airport by IATA code."""
        return self._get_by_secondary_code('iata', iata)

    def get_airport_by_faa(self, faa: str) -> Optional[Airport]:
        """Get an airport by FAA location identifier."""
        return self._get_by_secondary_code('faa', faa)

    # ---- Filtered lists -----------------------------------------------------

    def _list(self, where: str, *params: Any) -> List[Airport]:
        rows = self.db.prepare(f"SELECT icao FROM airports WHERE {where} ORDER BY name").all(*params)
        return self._assemble_all(rows)

    def get_airports_by_country(self, country_code: str) -> List[Airport]:
        """Get all airports in a country, by ISO 3166-1 alpha-2 code."""
        return self._list("country_code = ?", country_code)

    def get_airports_by_state(self, state: str, country_code: Optional[str] = None) -> List[Airport]:
        """Get all airports in a state or province, optionally restricted to one country."""
        if country_code:
            return self._list("state = ? AND country_code = ?", state, country_code)
        return self._list("state = ?", state)

    def get_airports_by_city(self, city: str) -> List[Airport]:
        return self._list("city = ?", city)

    def get_airports_by_type(self, airport_type) -> List[Airport]:
        """Get all airports of a classification, e.g. ``"large_airport"`` or ``AirportType.HELIPORT``."""
        return self._list("type = ?", _enum_value(airport_type))

    def get_airports_with_towers(self) -> List[Airport]:
        return self._list("has_tower = 1")

    def search_airports(self, options: Optional[SearchOptions] = None, **criteria) -> List[Airport]:
        """
        Search airports on any combination of criteria.

        Criteria can be passed as a SearchOptions or as keyword arguments,
        not both.
        Results are ordered by name and capped at 100 airports.

        Example:
            queries.search_airports(name="International", country_code="US", has_tower=True)
        """
        if options is None:
            options = SearchOptions(**criteria)
        elif criteria:
            raise TypeError("search_airports() takes SearchOptions or keyword criteria, not both")

        clauses = []
        params: List[Any] = []

        def add(clause: str, value: Any):
            clauses.append(clause)
            params.append(value)

        if options.icao:
            add("icao = ?", options.icao.upper())
        if options.iata:
            add("iata = ?", options.iata.upper())
        if options.name:
            add("name LIKE ?", f"%{options.name}%")
        if options.country:
            add("country LIKE ?", f"%{options.country}%")
        if options.country_code:
            add("country_code = ?", options.country_code.upper())
        if options.state:
            add("state = ?", options.state)
        if options.city:
            add("city = ?", options.city)
        if options.type:
            add("type = ?", _enum_value(options.type))
        if options.has_tower is not None:
            add("has_tower = ?", 1 if options.has_tower else 0)

        runway_clauses = []
        if options.min_runway_length_ft is not None:
            runway_clauses.append("r.length_ft >= ?")
            params.append(options.min_runway_length_ft)
        if options.max_runway_length_ft is not None:
            runway_clauses.append("r.length_ft <= ?")
            params.append(options.max_runway_length_ft)
        if options.surface:
            runway_clauses.append("r.surface = ?")
            params.append(_enum_value(options.surface))
        if runway_clauses:
            clauses.append(
                "EXISTS (SELECT 1 FROM runways r WHERE r.airport_id = airports.id AND "
                + " AND ".join(runway_clauses) + ")"
            )

        query = "SELECT icao FROM airports"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += f" ORDER BY name LIMIT {config.RESULT_LIMIT}"

        return self._assemble_all(self.db.prepare(query).all(*params))

    def count_airports(self) -> int:
        """Total number of airports in the database."""
        return self.db.prepare("SELECT COUNT(*) AS count FROM airports").get()['count']
