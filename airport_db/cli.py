#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__, config
from .models import Airport, SearchOptions
from .queries import AirportQueries
from .storage.native import NativeConnectionManager
from .utils.airac import airac_effective_date, is_valid_airac_cycle

logger = logging.getLogger(__name__)

RULE = "=" * 60


def format_airport(airport: Airport) -> str:
    """Full human-readable description of an airport."""
    identity = airport.identity
    location = airport.location
    infrastructure = airport.infrastructure

    lines = ["", RULE, identity.name, RULE, "", "Identity:", f"  ICAO: {identity.icao}"]
    if identity.iata:
        lines.append(f"  IATA: {identity.iata}")
    if identity.faa:
        lines.append(f"  FAA: {identity.faa}")
    lines.append(f"  Type: {identity.type.value}")
    if identity.status:
        lines.append(f"  Status: {identity.status.value}")

    lines += ["", "Location:", f"  Coordinates: {location.latitude:.4f}, {location.longitude:.4f}"]
    if location.elevation_ft is not None:
        lines.append(f"  Elevation: {location.elevation_ft:,} ft")
    lines.append(f"  Country: {location.country}")
    for label, value in (("State", location.state), ("City", location.city), ("Timezone", location.timezone)):
        if value:
            lines.append(f"  {label}: {value}")

    lines += ["", "Infrastructure:", f"  Runways: {len(infrastructure.runways) or 'Unknown'}"]
    for runway in infrastructure.runways:
        lines.append(f"    - {runway}")
    lines.append(f"  Control Tower: {'Yes' if infrastructure.has_tower else 'No'}")
    if infrastructure.fuel_types:
        lines.append(f"  Fuel Types: {', '.join(infrastructure.fuel_types)}")
    lines.append(f"  FBO: {'Yes' if infrastructure.has_fbo else 'No'}")
    lines.append(f"  Hangars: {'Yes' if infrastructure.has_hangars else 'No'}")
    lines.append(f"  Tie-downs: {'Yes' if infrastructure.has_tie_downs else 'No'}")

    operational = airport.operational
    if operational:
        cycle = operational.airac_cycle
        if is_valid_airac_cycle(cycle):
            cycle += f" (effective {airac_effective_date(cycle).isoformat()})"
        lines += ["", "Operational:", f"  AIRAC Cycle: {cycle}"]
        if operational.frequencies:
            lines.append("  Frequencies:")
            for name, frequency in operational.frequencies.items():
                label = name.upper() if name in ('atis', 'unicom') else name.capitalize()
                lines.append(f"    {label}: {frequency}")

    lines += ["", RULE, ""]
    return "\n".join(lines)


def format_summary(index: int, airport: Airport) -> str:
    """One list entry: codes, name and where the airport is."""
    identity = airport.identity
    location = airport.location
    return (
        f"{index}. {identity.icao} {identity.iata or 'N/A'} - {identity.name}\n"
        f"   Type: {identity.type.value}\n"
        f"   Location: {location.city or 'N/A'}, {location.state or 'N/A'} ({location.country_code})\n"
    )


class Command:
    """Command-line interface for airport_db."""

    def __init__(self, args, queries: Optional[AirportQueries] = None):
        """
        Args:
            args: Parsed command line arguments
            queries: Optional query layer, defaults to one over the native database
        """
        self.args = args
        if queries is None:
            queries = AirportQueries(NativeConnectionManager(args.database))
        self.queries = queries

    def _value(self, index: int = 0) -> Optional[str]:
        values = self.args.values
        return values[index] if len(values) > index else None

    def _require_value(self, what: str) -> str:
        value = self._value()
        if not value:
            raise ValueError(f"{self.args.command} needs {what}")
        return value

    def _print_one(self, airport: Optional[Airport], kind: str, code: str):
        if airport is None:
            print(f"No airport found with {kind} code: {code}")
        elif self.args.format == 'json':
            print(json.dumps(airport.to_dict(), indent=2))
        else:
            print(format_airport(airport))

    def _print_list(self, airports: List[Airport], title: str):
        limit = self.args.limit
        if self.args.format == 'json':
            print(json.dumps([a.to_dict() for a in airports[:limit]], indent=2))
            return
        print(f"Found {len(airports)} {title}")
        print("")
        for index, airport in enumerate(airports[:limit], start=1):
            print(format_summary(index, airport))
        if len(airports) > limit:
            print(f"... and {len(airports) - limit} more results")

    def run_icao(self):
        code = self._require_value("an ICAO code").upper()
        self._print_one(self.queries.get_airport_by_icao(code), "ICAO", code)

    def run_iata(self):
        code = self._require_value("an IATA code").upper()
        self._print_one(self.queries.get_airport_by_iata(code), "IATA", code)

    def run_faa(self):
        code = self._require_value("an FAA code").upper()
        self._print_one(self.queries.get_airport_by_faa(code), "FAA", code)

    def run_country(self):
        code = self._require_value("a country code").upper()
        self._print_list(self.queries.get_airports_by_country(code), f"airports in {code}")

    def run_state(self):
        state = self._require_value("a state")
        country_code = self._value(1)
        title = f"airports in {state}" + (f" ({country_code})" if country_code else "")
        self._print_list(self.queries.get_airports_by_state(state, country_code), title)

    def run_city(self):
        city = self._require_value("a city")
        self._print_list(self.queries.get_airports_by_city(city), f"airports in {city}")

    def run_type(self):
        airport_type = self._require_value("an airport type")
        self._print_list(self.queries.get_airports_by_type(airport_type), f"{airport_type} airports")

    def run_towers(self):
        self._print_list(self.queries.get_airports_with_towers(), "airports with towers")

    def run_search(self):
        options = SearchOptions(
            icao=self.args.icao,
            iata=self.args.iata,
            name=self.args.name,
            country=self.args.country,
            country_code=self.args.country_code,
            state=self.args.state,
            city=self.args.city,
            type=self.args.type,
            has_tower=True if self.args.towers else None,
            min_runway_length_ft=self.args.min_runway,
            max_runway_length_ft=self.args.max_runway,
            surface=self.args.surface,
        )
        self._print_list(self.queries.search_airports(options), "matching airports")

    def run_stats(self):
        total = self.queries.count_airports()
        if self.args.format == 'json':
            print(json.dumps({'total_airports': total}))
            return
        print("Airport Database Statistics")
        print("")
        print(f"Total Airports: {total}")

    def close(self):
        self.queries.provider.close_database()

    def run(self) -> int:
        """Run the specified command, always releasing the database afterwards."""
        try:
            getattr(self, f'run_{self.args.command}')()
            return 0
        except Exception as e:
            logger.error(f'{self.args.command} failed: {e}')
            print(f"Error: {e}", file=sys.stderr)
            if self.args.verbose:
                import traceback
                traceback.print_exc()
            return 1
        finally:
            self.close()


COMMANDS = ['icao', 'iata', 'faa', 'country', 'state', 'city', 'type', 'towers', 'search', 'stats']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='airport-db', description='Query airport data from the command line')
    parser.add_argument('command', help='Command to execute', choices=COMMANDS)
    parser.add_argument('values', help='Code, country, state [country code], city or type', nargs='*')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-d', '--database', help='SQLite database file (defaults to the bundled database)')
    parser.add_argument('-l', '--limit', help='Limit listed results', type=int, default=20)
    parser.add_argument('--format', help='Output format', choices=['human', 'json'], default='human')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')

    search = parser.add_argument_group('search criteria')
    search.add_argument('-i', '--icao', help='ICAO code')
    search.add_argument('-a', '--iata', help='IATA code')
    search.add_argument('-n', '--name', help='Airport name (partial match)')
    search.add_argument('-c', '--country', help='Country name (partial match)')
    search.add_argument('--country-code', help='ISO country code')
    search.add_argument('-s', '--state', help='State/province')
    search.add_argument('-y', '--city', help='City')
    search.add_argument('-t', '--type', help='Airport type, e.g. large_airport')
    search.add_argument('-T', '--towers', help='Only airports with towers', action='store_true')
    search.add_argument('--min-runway', help='Minimum runway length in feet', type=int)
    search.add_argument('--max-runway', help='Maximum runway length in feet', type=int)
    search.add_argument('--surface', help='Runway surface, e.g. asphalt')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    return Command(args).run()


if __name__ == '__main__':
    sys.exit(main())
