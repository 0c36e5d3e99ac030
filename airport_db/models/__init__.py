"""
Data models for the airport_db library.

An ``Airport`` is assembled from four parts: identity, location,
infrastructure and optional operational data.
"""

from .airport import Airport, AirportIdentity, AirportType, AirportTypeSource, AirportStatus
from .infrastructure import AirportInfrastructure, AirportLocation, Runway, RunwaySurface
from .operational import AirportFrequencies, AirportOperational
from .search import SearchOptions

__all__ = [
    'Airport',
    'AirportIdentity',
    'AirportType',
    'AirportTypeSource',
    'AirportStatus',
    'AirportInfrastructure',
    'AirportLocation',
    'Runway',
    'RunwaySurface',
    'AirportFrequencies',
    'AirportOperational',
    'SearchOptions',
]
