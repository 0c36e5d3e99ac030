"""
AIRAC cycle helpers.

AIRAC (Aeronautical Information Regulation and Control) cycles are 28 days
long and always start on a Thursday. A cycle is identified as "YYCC": the
two-digit year followed by the cycle number within that year, starting at 01.
A year holds 13 cycles, occasionally 14.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

AIRAC_CYCLE_DAYS = 28

# Known effective date of cycle 2501
REFERENCE_AIRAC_DATE = date(2025, 1, 23)

_CYCLE_RE = re.compile(r'^(\d{2})(\d{2})$')


def _first_airac_of_year(year: int) -> date:
    """First AIRAC effective date falling in ``year``."""
    days = (date(year, 1, 1) - REFERENCE_AIRAC_DATE).days
    cycles = -(-days // AIRAC_CYCLE_DAYS)  # ceiling division
    return REFERENCE_AIRAC_DATE + timedelta(days=cycles * AIRAC_CYCLE_DAYS)


def airac_effective_date(cycle: str) -> date:
    """
    Get the effective date of an AIRAC cycle.

    Args:
        cycle: Cycle identifier in "YYCC" format, e.g. "2601"

    Returns:
        The Thursday the cycle became effective

    Raises:
        ValueError: If the identifier is malformed or the year has no such cycle
    """
    match = _CYCLE_RE.match(cycle or '')
    if not match:
        raise ValueError(f"Invalid AIRAC cycle: {cycle!r}. Expected YYCC")
    year = 2000 + int(match.group(1))
    number = int(match.group(2))
    if number < 1:
        raise ValueError(f"Invalid AIRAC cycle: {cycle!r}. Cycle numbers start at 01")

    effective = _first_airac_of_year(year) + timedelta(days=(number - 1) * AIRAC_CYCLE_DAYS)
    if effective.year != year:
        raise ValueError(f"AIRAC cycle {cycle} does not exist, {year} has fewer cycles")
    return effective


def is_valid_airac_cycle(cycle: Optional[str]) -> bool:
    """Check if a string is an existing "YYCC" AIRAC cycle."""
    try:
        airac_effective_date(cycle)
    except ValueError:
        return False
    return True


def airac_cycle_for_date(when: Optional[Union[date, datetime]] = None) -> str:
    """
    Get the identifier of the AIRAC cycle in effect on a date.

    Args:
        when: Date to look up (defaults to today)

    Returns:
        Cycle identifier in "YYCC" format
    """
    if when is None:
        when = date.today()
    elif isinstance(when, datetime):
        when = when.date()

    cycles = (when - REFERENCE_AIRAC_DATE).days // AIRAC_CYCLE_DAYS
    effective = REFERENCE_AIRAC_DATE + timedelta(days=cycles * AIRAC_CYCLE_DAYS)
    number = (effective - _first_airac_of_year(effective.year)).days // AIRAC_CYCLE_DAYS + 1
    return f"{effective.year % 100:02d}{number:02d}"
