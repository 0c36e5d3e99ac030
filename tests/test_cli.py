#!/usr/bin/env python3

import json
import pytest

from airport_db.cli import Command, build_parser, main
from airport_db.storage import ConnectionState


def run(capsys, database_path, *argv):
    code = main(list(argv) + ['-d', str(database_path)])
    return code, capsys.readouterr()


def test_icao_details(capsys, database_path):
    code, captured = run(capsys, database_path, 'icao', 'kpao')

    assert code == 0
    out = captured.out
    assert "Palo Alto Airport" in out
    assert "  FAA: PAO" in out
    assert "IATA:" not in out
    assert "Runway 13/31: 2443x70 ft, asphalt (Lit)" in out
    assert "Fuel Types: 100LL" in out
    assert "AIRAC Cycle: 2601 (effective 2026-01-22)" in out
    assert "Tower: 118.600" in out


def test_icao_not_found(capsys, database_path):
    code, captured = run(capsys, database_path, 'icao', 'ZZZZ')

    assert code == 0
    assert "No airport found with ICAO code: ZZZZ" in captured.out


def test_iata_json(capsys, database_path):
    code, captured = run(capsys, database_path, 'iata', 'lhr', '--format', 'json')

    assert code == 0
    data = json.loads(captured.out)
    assert data['identity']['icao'] == 'EGLL'
    assert data['operational']['airac_cycle'] == '2513'


def test_country_list_with_limit(capsys, database_path):
    code, captured = run(capsys, database_path, 'country', 'gb', '--limit', '1')

    assert code == 0
    assert "Found 2 airports in GB" in captured.out
    assert "1. EGKB BQH - London Biggin Hill Airport" in captured.out
    assert "EGLL" not in captured.out
    assert "... and 1 more results" in captured.out


def test_state_with_country(capsys, database_path):
    code, captured = run(capsys, database_path, 'state', 'New York', 'US')

    assert code == 0
    assert "Found 2 airports in New York (US)" in captured.out
    assert "KNYC N/A - Downtown Manhattan Heliport" in captured.out


def test_search_options(capsys, database_path):
    code, captured = run(capsys, database_path, 'search', '--country-code', 'us', '-T', '--min-runway', '10000')

    assert code == 0
    assert "Found 2 matching airports" in captured.out
    assert "KJFK" in captured.out
    assert "KSFO" in captured.out


def test_stats_json(capsys, database_path):
    code, captured = run(capsys, database_path, 'stats', '--format', 'json')

    assert code == 0
    assert json.loads(captured.out) == {'total_airports': 9}


def test_missing_value_is_an_error(capsys, database_path):
    code, captured = run(capsys, database_path, 'icao')

    assert code == 1
    assert "Error: icao needs an ICAO code" in captured.err


def test_connection_closed_after_run(capsys, manager, queries):
    args = build_parser().parse_args(['towers', '--limit', '3'])

    assert Command(args, queries=queries).run() == 0
    assert manager.state == ConnectionState.CLOSED
    assert "Found 7 airports with towers" in capsys.readouterr().out


def test_connection_closed_after_error(capsys, manager, queries):
    args = build_parser().parse_args(['type', 'large_airport'])
    command = Command(args, queries=queries)
    manager.get_database()
    command.run_type = None

    assert command.run() == 1
    assert manager.state == ConnectionState.CLOSED


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--version'])
    assert exc_info.value.code == 0
    assert "airport-db" in capsys.readouterr().out


def test_missing_database_file_is_an_error(capsys, tmp_path):
    code, captured = run(capsys, tmp_path / 'typo.sqlite', 'stats')

    assert code == 1
    assert "Could not locate airports database" in captured.err
    assert "Total Airports" not in captured.out
