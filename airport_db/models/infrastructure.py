from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RunwaySurface(Enum):
    """Runway surface material."""

    ASPHALT = "asphalt"
    CONCRETE = "concrete"
    GRASS = "grass"
    GRAVEL = "gravel"
    WATER = "water"
    DIRT = "dirt"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> 'RunwaySurface':
        """Map a stored surface value to the enum, UNKNOWN for anything unrecognised."""
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN


def _optional_bool(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


@dataclass
class Runway:
    """Data class for storing runway information."""

    id: str
    length_ft: Optional[int] = None
    width_ft: Optional[int] = None
    surface: RunwaySurface = RunwaySurface.UNKNOWN
    lighting: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Runway':
        """Create instance from a ``runways`` row."""
        return cls(
            id=str(row['id']),
            length_ft=None if row.get('length_ft') is None else int(row['length_ft']),
            width_ft=None if row.get('width_ft') is None else int(row['width_ft']),
            surface=RunwaySurface.parse(row.get('surface')),
            lighting=bool(row.get('lighting')),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'length_ft': self.length_ft,
            'width_ft': self.width_ft,
            'surface': self.surface.value,
            'lighting': self.lighting,
        }

    def __str__(self):
        runway_info = f"Runway {self.id}"
        if self.length_ft:
            runway_info += f": {self.length_ft}x{self.width_ft or '?'} ft"
        runway_info += f", {self.surface.value}"
        if self.lighting:
            runway_info += " (Lit)"
        return runway_info


@dataclass
class AirportInfrastructure:
    """Physical airport characteristics."""

    runways: List[Runway] = field(default_factory=list)
    has_tower: bool = False
    fuel_types: Optional[List[str]] = None
    has_fbo: Optional[bool] = None
    has_hangars: Optional[bool] = None
    has_tie_downs: Optional[bool] = None

    @classmethod
    def empty(cls) -> 'AirportInfrastructure':
        """Infrastructure used when the airport has no tower-flag row."""
        return cls(runways=[], has_tower=False)

    @classmethod
    def from_rows(cls, tower_row: Dict[str, Any], runway_rows: List[Dict[str, Any]],
                  amenity_row: Optional[Dict[str, Any]], fuel_rows: List[Dict[str, Any]]) -> 'AirportInfrastructure':
        """Merge the rows of the infrastructure lookups into one record."""
        amenity_row = amenity_row or {}
        return cls(
            runways=[Runway.from_row(row) for row in runway_rows],
            has_tower=bool(tower_row.get('has_tower')),
            fuel_types=[row['fuel_type'] for row in fuel_rows],
            has_fbo=_optional_bool(amenity_row.get('has_fbo')),
            has_hangars=_optional_bool(amenity_row.get('has_hangars')),
            has_tie_downs=_optional_bool(amenity_row.get('has_tie_downs')),
        )

    @property
    def longest_runway_ft(self) -> Optional[int]:
        lengths = [r.length_ft for r in self.runways if r.length_ft is not None]
        return max(lengths) if lengths else None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            'runways': [r.to_dict() for r in self.runways],
            'has_tower': self.has_tower,
        }
        for key in ('fuel_types', 'has_fbo', 'has_hangars', 'has_tie_downs'):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class AirportLocation:
    """Geographic and regional metadata for an airport."""

    latitude: float
    longitude: float
    elevation_ft: Optional[int]
    country: str
    country_code: str
    state: Optional[str] = None
    county: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    timezone: Optional[str] = None
    magnetic_variation: Optional[float] = None  # degrees, may change per AIRAC cycle

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'AirportLocation':
        """Create instance from the location columns of an ``airports`` row."""
        return cls(
            latitude=float(row['latitude']),
            longitude=float(row['longitude']),
            elevation_ft=None if row.get('elevation_ft') is None else int(row['elevation_ft']),
            country=row.get('country'),
            country_code=row.get('country_code'),
            state=row.get('state'),
            county=row.get('county'),
            city=row.get('city'),
            zip=None if row.get('zip') is None else str(row['zip']),
            timezone=row.get('timezone'),
            magnetic_variation=_optional_float(row.get('magnetic_variation')),
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None}
