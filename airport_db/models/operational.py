from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Dict, Optional

from ..utils.airac import airac_effective_date


@dataclass
class AirportFrequencies:
    """Radio frequencies for airport communication."""

    atis: Optional[str] = None
    tower: Optional[str] = None
    ground: Optional[str] = None
    clearance: Optional[str] = None
    unicom: Optional[str] = None
    approach: Optional[str] = None
    departure: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'AirportFrequencies':
        known_fields = {f.name for f in fields(cls)}
        return cls(**{k: None if v is None else str(v) for k, v in row.items() if k in known_fields})

    def items(self):
        """Iterate over (name, frequency) pairs that are set."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value:
                yield f.name, value

    def to_dict(self) -> dict:
        return dict(self.items())


@dataclass
class AirportOperational:
    """
    Operational metadata that may change with each AIRAC cycle.

    ``airac_cycle`` is the four-character "YYCC" identifier, e.g. "2601".
    """

    airac_cycle: str
    frequencies: Optional[AirportFrequencies] = None

    def effective_date(self) -> date:
        """
        Date the AIRAC cycle of this record became effective.

        Raises:
            ValueError: If ``airac_cycle`` is not a valid cycle identifier
        """
        return airac_effective_date(self.airac_cycle)

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {'airac_cycle': self.airac_cycle}
        if self.frequencies is not None:
            data['frequencies'] = self.frequencies.to_dict()
        return data
