from dataclasses import dataclass, fields
from typing import Optional, Union

from .airport import AirportType
from .infrastructure import RunwaySurface


@dataclass
class SearchOptions:
    """
    Criteria for ``search_airports``.

    Only the fields that are set constrain the result; ``name`` and
    ``country`` are substring matches, everything else is exact.
    """

    icao: Optional[str] = None
    iata: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    type: Optional[Union[AirportType, str]] = None
    has_tower: Optional[bool] = None
    min_runway_length_ft: Optional[int] = None
    max_runway_length_ft: Optional[int] = None
    surface: Optional[Union[RunwaySurface, str]] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))
