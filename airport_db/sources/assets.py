#!/usr/bin/env python3

"""
Asset loading for the in-page (browser) runtime.

Database bytes are resolved through one of three chains, depending on what
the caller supplied:

- raw bytes: used as-is, no network access
- a URL string: fetched from that URL, failures are not recovered
- nothing: the versioned CDN copy, falling back to the copy bundled
  with this package

The engine location follows a simpler rule: caller-supplied, else the
bundled default.
"""

import logging
from importlib import resources
from typing import Optional, Union

import requests

from .. import config
from ..exceptions import AirportDbError, AssetFetchError, CorsOrNetworkError
from .fallback import FallbackChain, Strategy

logger = logging.getLogger(__name__)

DatabaseInput = Union[str, bytes, bytearray, memoryview]


def make_session() -> requests.Session:
    """Fresh session for asset downloads: no auth, no cookies."""
    session = requests.Session()
    session.headers["User-Agent"] = config.USER_AGENT
    return session


def fetch_database_bytes(url: str, session: Optional[requests.Session] = None,
                         timeout: float = config.HTTP_TIMEOUT) -> bytes:
    """
    Download the database file at ``url``.

    Raises:
        CorsOrNetworkError: If the request was rejected before a response arrived
        AssetFetchError: If the server answered with a non-success status
    """
    if session is None:
        with make_session() as session:
            return fetch_database_bytes(url, session, timeout)

    try:
        response = session.get(url, timeout=timeout)
    except requests.exceptions.ConnectionError as e:
        raise CorsOrNetworkError(url) from e

    if not response.ok:
        raise AssetFetchError(
            f'Failed to fetch SQLite database from "{url}" ({response.status_code} {response.reason})',
            url=url,
            status_code=response.status_code,
        )

    data = response.content
    logger.info(f"Fetched {len(data)} bytes of airports database from {url}")
    return data


class BytesSource(Strategy[bytes]):
    """Database bytes handed over by the caller."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self.data = data

    def load(self) -> bytes:
        return bytes(self.data)


class UrlSource(Strategy[bytes]):
    """Database bytes fetched over HTTP."""

    def __init__(self, url: str, session: Optional[requests.Session] = None, label: str = 'url'):
        self.url = url
        self.session = session
        self.label = label

    @property
    def name(self) -> str:
        return f"{self.label} {self.url}"

    def load(self) -> bytes:
        return fetch_database_bytes(self.url, session=self.session)


class BundledSource(Strategy[bytes]):
    """The database copy shipped inside the package, the source of last resort."""

    def __init__(self, resource: str = config.BUNDLED_DATABASE_RESOURCE, package: str = 'airport_db'):
        self.resource = resource
        self.package = package

    @property
    def name(self) -> str:
        return f"bundled {self.package}/{self.resource}"

    def load(self) -> bytes:
        try:
            data = resources.files(self.package).joinpath(self.resource).read_bytes()
        except (FileNotFoundError, ModuleNotFoundError) as e:
            raise AssetFetchError(f"Bundled airports database is missing: {self.name}", url=self.name) from e
        logger.info(f"Using bundled airports database ({len(data)} bytes)")
        return data


def build_database_chain(database: Optional[DatabaseInput] = None,
                         session: Optional[requests.Session] = None) -> FallbackChain[bytes]:
    """
    Build the byte resolution chain for what the caller supplied.

    Args:
        database: Raw database bytes, a URL string, or None for the default sources
        session: Optional requests.Session for the HTTP fetches
    """
    if isinstance(database, (bytes, bytearray, memoryview)):
        strategies = [BytesSource(database)]
    elif isinstance(database, str):
        strategies = [UrlSource(database, session=session)]
    elif database is None:
        strategies = [
            UrlSource(config.DEFAULT_CDN_DATABASE_URL, session=session, label='cdn'),
            BundledSource(),
        ]
    else:
        raise TypeError(f"database must be bytes or a URL string, not {type(database).__name__}")
    return FallbackChain(strategies, recoverable=(AirportDbError, requests.RequestException, OSError))


class _Location(Strategy[str]):

    def __init__(self, value: Optional[str], label: str):
        self.value = value
        self.label = label

    @property
    def name(self) -> str:
        return f"{self.label} engine location"

    def load(self) -> str:
        if not self.value:
            raise LookupError(f"no {self.label} engine location")
        return self.value


def resolve_wasm_url(wasm_url: Optional[str] = None) -> str:
    """Location of the SQLite engine package: ``wasm_url`` if given, else the bundled default."""
    strategies = [_Location(wasm_url, 'caller')] if wasm_url else []
    strategies.append(_Location(config.DEFAULT_WASM_URL, 'bundled'))
    chain = FallbackChain(strategies, recoverable=(LookupError,))
    location = chain.resolve()
    logger.debug(f"SQLite engine location: {location}")
    return location
