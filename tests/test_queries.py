"""
Tests for the record assembly layer.
"""

import pytest
from unittest.mock import patch

from airport_db.models import (
    AirportInfrastructure,
    AirportStatus,
    AirportType,
    AirportTypeSource,
    RunwaySurface,
    SearchOptions,
)
from airport_db.queries import AirportQueries, LOCATION_SQL, TOWER_SQL
from airport_db.storage import NativeConnectionManager, QueryDatabase, QueryStatement


class EmptyStatement(QueryStatement):

    def get(self, *params):
        return None

    def all(self, *params):
        return []


class MaskingDatabase(QueryDatabase):
    """Wraps a real database and returns nothing for selected statements."""

    def __init__(self, inner, masked):
        self.inner = inner
        self.masked = masked

    def prepare(self, sql):
        if sql in self.masked:
            return EmptyStatement()
        return self.inner.prepare(sql)

    def close(self):
        self.inner.close()


class MaskingProvider:

    def __init__(self, manager, *masked):
        self.manager = manager
        self.masked = masked

    def get_database(self):
        return MaskingDatabase(self.manager.get_database(), self.masked)


class TestSingleLookups:

    def test_full_record(self, queries):
        airport = queries.get_airport_by_icao('KJFK')

        assert airport is not None
        assert airport.identity.icao == 'KJFK'
        assert airport.identity.iata == 'JFK'
        assert airport.identity.type == AirportType.LARGE_AIRPORT
        assert airport.identity.type_source == AirportTypeSource.OURAIRPORTS
        assert airport.identity.status == AirportStatus.OPERATIONAL
        assert airport.identity.is_public_use is True

        assert airport.location.country_code == 'US'
        assert airport.location.city == 'New York'
        assert airport.location.latitude == pytest.approx(40.639447)
        assert airport.location.elevation_ft == 13
        assert airport.location.magnetic_variation == -13.0

        infrastructure = airport.infrastructure
        assert [r.id for r in infrastructure.runways] == ['04L/22R', '13R/31L']
        assert infrastructure.runways[1].surface == RunwaySurface.CONCRETE
        assert infrastructure.runways[1].length_ft == 14511
        assert infrastructure.runways[0].lighting is True
        assert infrastructure.has_tower is True
        assert infrastructure.fuel_types == ['JetA', '100LL']
        assert infrastructure.has_fbo is True
        assert infrastructure.has_tie_downs is False
        assert infrastructure.longest_runway_ft == 14511

        assert airport.operational.airac_cycle == '2601'
        assert airport.operational.frequencies.tower == '119.100'
        assert airport.operational.frequencies.unicom is None

    def test_primary_code_round_trip(self, queries, manager):
        codes = [row['icao'] for row in manager.get_database().prepare("SELECT icao FROM airports").all()]
        for code in codes:
            assert queries.get_airport_by_icao(code).identity.icao == code

    def test_unknown_code(self, queries):
        assert queries.get_airport_by_icao('ZZZZ') is None

    def test_code_is_case_sensitive(self, queries):
        assert queries.get_airport_by_icao('kjfk') is None

    def test_no_amenity_or_operational_rows(self, queries):
        airport = queries.get_airport_by_icao('KLAX')

        assert airport.infrastructure.has_tower is True
        assert airport.infrastructure.fuel_types == []
        assert airport.infrastructure.has_fbo is None
        assert airport.operational is None

    def test_operational_without_frequencies(self, queries):
        airport = queries.get_airport_by_icao('EGLL')

        assert airport.operational.airac_cycle == '2513'
        assert airport.operational.frequencies is None

    def test_unrecognised_surface(self, queries):
        runways = queries.get_airport_by_icao('EGKB').infrastructure.runways

        assert runways[1].surface == RunwaySurface.UNKNOWN
        assert runways[1].lighting is False

    def test_iata_matches_icao_lookup(self, queries):
        assert queries.get_airport_by_iata('LHR') == queries.get_airport_by_icao('EGLL')

    def test_faa_lookup(self, queries):
        airport = queries.get_airport_by_faa('PAO')

        assert airport.identity.icao == 'KPAO'
        assert airport.identity.iata is None

    def test_unknown_secondary_code_skips_primary_lookup(self, queries):
        with patch.object(queries, 'get_airport_by_icao') as lookup:
            assert queries.get_airport_by_iata('XXX') is None
            assert queries.get_airport_by_faa('XXX') is None
            lookup.assert_not_called()

    def test_results_are_independent(self, queries):
        first = queries.get_airport_by_icao('KJFK')
        first.infrastructure.runways.clear()

        assert len(queries.get_airport_by_icao('KJFK').infrastructure.runways) == 2


class TestAssemblyGates:

    def test_missing_location_means_not_found(self, manager):
        queries = AirportQueries(MaskingProvider(manager, LOCATION_SQL))

        assert queries.get_airport_by_icao('KJFK') is None
        assert queries.get_airport_by_iata('JFK') is None
        assert queries.get_airports_by_country('US') == []

    def test_missing_tower_row_defaults_infrastructure(self, manager):
        queries = AirportQueries(MaskingProvider(manager, TOWER_SQL))

        airport = queries.get_airport_by_icao('KJFK')

        assert airport is not None
        assert airport.infrastructure == AirportInfrastructure.empty()
        assert airport.operational is not None

    def test_single_bare_airport(self, make_database):
        path = make_database(
            "INSERT INTO airports (id, icao, name, type, latitude, longitude, elevation_ft, country, country_code) "
            "VALUES (1, 'KJFK', 'John F Kennedy International Airport', 'large_airport', 40.64, -73.78, 13, "
            "'United States', 'US')"
        )
        manager = NativeConnectionManager(path)
        try:
            airport = AirportQueries(manager).get_airport_by_icao('KJFK')
        finally:
            manager.close_database()

        assert airport.identity.icao == 'KJFK'
        assert airport.identity.type_source is None
        assert airport.infrastructure.runways == []
        assert airport.infrastructure.has_tower is False
        assert airport.operational is None


class TestFilteredLists:

    def test_by_country(self, queries):
        names = [a.name for a in queries.get_airports_by_country('GB')]
        assert names == ['London Biggin Hill Airport', 'London Heathrow Airport']

    def test_by_state(self, queries):
        icaos = [a.icao for a in queries.get_airports_by_state('California')]
        assert icaos == ['KHAF', 'KLAX', 'KPAO', 'KSFO']

    def test_by_state_and_country(self, queries):
        assert [a.icao for a in queries.get_airports_by_state('New York', 'US')] == ['KNYC', 'KJFK']
        assert queries.get_airports_by_state('England', 'US') == []

    def test_by_city(self, queries):
        assert {a.icao for a in queries.get_airports_by_city('London')} == {'EGLL', 'EGKB'}

    def test_by_type(self, queries):
        assert [a.icao for a in queries.get_airports_by_type(AirportType.HELIPORT)] == ['KNYC']
        assert len(queries.get_airports_by_type('large_airport')) == 5

    def test_by_type_sorted_by_name(self, make_database):
        path = make_database(
            "INSERT INTO airports (id, icao, name, type, latitude, longitude, country, country_code) VALUES "
            "(1, 'CCCC', 'Charlie Airport', 'large_airport', 0, 0, 'Testland', 'TL'),"
            "(2, 'AAAA', 'Alpha Airport', 'large_airport', 0, 0, 'Testland', 'TL'),"
            "(3, 'BBBB', 'Bravo Airport', 'large_airport', 0, 0, 'Testland', 'TL')"
        )
        manager = NativeConnectionManager(path)
        try:
            names = [a.name for a in AirportQueries(manager).get_airports_by_type('large_airport')]
        finally:
            manager.close_database()

        assert names == ['Alpha Airport', 'Bravo Airport', 'Charlie Airport']

    def test_with_towers(self, queries):
        airports = queries.get_airports_with_towers()

        assert len(airports) == 7
        assert all(a.infrastructure.has_tower for a in airports)
        assert 'KHAF' not in {a.icao for a in airports}

    def test_no_match(self, queries):
        assert queries.get_airports_by_city('Atlantis') == []


class TestSearch:

    def test_no_criteria(self, queries):
        airports = queries.search_airports()
        names = [a.name for a in airports]

        assert len(airports) == 9
        assert names == sorted(names)

    def test_country_code_is_exact_and_upper_cased(self, queries):
        airports = queries.search_airports(country_code='gb')

        assert len(airports) == 2
        assert all(a.location.country_code == 'GB' for a in airports)

    def test_partial_name(self, queries):
        airports = queries.search_airports(name='International')

        assert [a.icao for a in airports] == ['KJFK', 'KLAX', 'KSFO']
        assert all('International' in a.name for a in airports)

    def test_partial_country_name(self, queries):
        assert {a.icao for a in queries.search_airports(country='King')} == {'EGLL', 'EGKB'}

    def test_combined_criteria(self, queries):
        airports = queries.search_airports(SearchOptions(name='Airport', state='California', has_tower=False))
        assert [a.icao for a in airports] == ['KHAF']

    def test_codes(self, queries):
        assert [a.icao for a in queries.search_airports(icao='kjfk')] == ['KJFK']
        assert [a.icao for a in queries.search_airports(iata='cdg')] == ['LFPG']

    def test_type_enum(self, queries):
        airports = queries.search_airports(type=AirportType.MEDIUM_AIRPORT)
        assert [a.icao for a in airports] == ['EGKB']

    def test_runway_length(self, queries):
        assert [a.icao for a in queries.search_airports(min_runway_length_ft=12000)] == ['KJFK', 'EGLL', 'LFPG']
        assert [a.icao for a in queries.search_airports(max_runway_length_ft=3000)] == ['EGKB', 'KPAO']

    def test_runway_surface(self, queries):
        airports = queries.search_airports(surface=RunwaySurface.CONCRETE, country_code='US')
        assert [a.icao for a in airports] == ['KJFK', 'KLAX']

    def test_result_cap(self, make_database):
        rows = ",".join(
            f"({i}, 'X{i:03d}', 'Airport {i:03d}', 'small_airport', 0, 0, 'Testland', 'TL')"
            for i in range(150, 0, -1)
        )
        path = make_database(
            f"INSERT INTO airports (id, icao, name, type, latitude, longitude, country, country_code) VALUES {rows}"
        )
        manager = NativeConnectionManager(path)
        try:
            queries = AirportQueries(manager)
            airports = queries.search_airports()
            total = queries.count_airports()
        finally:
            manager.close_database()

        assert total == 150
        assert len(airports) == 100
        assert airports[0].name == 'Airport 001'
        assert airports[-1].name == 'Airport 100'


def test_count_airports(queries, manager):
    row = manager.get_database().prepare("SELECT COUNT(*) AS count FROM airports").get()
    assert queries.count_airports() == row['count'] == 9


def test_search_rejects_options_and_keywords_together(queries):
    with pytest.raises(TypeError):
        queries.search_airports(SearchOptions(country_code='GB'), has_tower=True)
