from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from .infrastructure import AirportInfrastructure, AirportLocation
from .operational import AirportOperational


class AirportType(Enum):
    """Airport classification."""

    LARGE_AIRPORT = "large_airport"
    MEDIUM_AIRPORT = "medium_airport"
    SMALL_AIRPORT = "small_airport"
    HELIPORT = "heliport"
    SEAPLANE_BASE = "seaplane_base"
    BALLOONPORT = "balloonport"
    ULTRALIGHT_PARK = "ultralight_park"
    GLIDERPORT = "gliderport"
    CLOSED = "closed"
    OTHER = "other"


class AirportTypeSource(Enum):
    """Data source the classification was taken from."""

    OURAIRPORTS = "ourairports"
    OPENFLIGHTS = "openflights"
    FAA = "faa"
    ICAO = "icao"
    DERIVED = "derived"
    UNKNOWN = "unknown"


class AirportStatus(Enum):
    """Operational status of an airport."""

    OPERATIONAL = "operational"
    CLOSED = "closed"
    MILITARY = "military"
    PRIVATE = "private"


E = TypeVar('E', bound=Enum)


def _parse_enum(enum_cls: Type[E], value: Any, default: Optional[E] = None) -> Optional[E]:
    """None stays None, unrecognised values map to ``default``."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass
class AirportIdentity:
    """Stable identifiers and classification for an airport."""

    icao: str  # primary lookup key
    name: str
    type: AirportType
    iata: Optional[str] = None
    faa: Optional[str] = None
    local: Optional[str] = None
    type_source: Optional[AirportTypeSource] = None
    status: Optional[AirportStatus] = None
    is_public_use: Optional[bool] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'AirportIdentity':
        """Create instance from the identity columns of an ``airports`` row."""
        is_public_use = row.get('is_public_use')
        return cls(
            icao=row['icao'],
            name=row.get('name'),
            type=_parse_enum(AirportType, row.get('type') or 'other', AirportType.OTHER),
            iata=row.get('iata'),
            faa=row.get('faa'),
            local=row.get('local'),
            type_source=_parse_enum(AirportTypeSource, row.get('type_source'), AirportTypeSource.UNKNOWN),
            status=_parse_enum(AirportStatus, row.get('status')),
            is_public_use=None if is_public_use is None else bool(is_public_use),
        )

    def to_dict(self) -> dict:
        data = {}
        for key, value in self.__dict__.items():
            if value is None:
                continue
            data[key] = value.value if isinstance(value, Enum) else value
        return data


@dataclass
class Airport:
    """
    Complete airport record.

    Identity and location are always present, infrastructure falls back to
    an empty record and operational data is only set when the store has it.
    """

    identity: AirportIdentity
    location: AirportLocation
    infrastructure: AirportInfrastructure
    operational: Optional[AirportOperational] = None

    @property
    def icao(self) -> str:
        return self.identity.icao

    @property
    def name(self) -> str:
        return self.identity.name

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            'identity': self.identity.to_dict(),
            'location': self.location.to_dict(),
            'infrastructure': self.infrastructure.to_dict(),
        }
        if self.operational is not None:
            data['operational'] = self.operational.to_dict()
        return data

    def __repr__(self):
        return f"Airport(icao='{self.identity.icao}', name='{self.identity.name}')"
