"""
Exception taxonomy for the airport_db library.

Lookups that find nothing return ``None`` (or an empty list); the classes
below are reserved for infrastructure failures that the caller has to act on.
"""

from typing import List, Optional


class AirportDbError(Exception):
    """Base class for all airport_db errors."""


class DatabaseNotInitializedError(AirportDbError):
    """Raised when the browser database is queried before initialization."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Browser database is not initialized. "
            "Call initialize_browser_database(...) before querying."
        )


class AssetResolutionError(AirportDbError):
    """Raised when the native database file cannot be located."""

    def __init__(self, attempted: List[str]):
        self.attempted = attempted
        tried = ", ".join(attempted) if attempted else "no locations"
        super().__init__(f"Could not locate airports database (tried: {tried})")


class AssetFetchError(AirportDbError):
    """Raised when database bytes cannot be fetched from a URL or the bundled copy."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CorsOrNetworkError(AssetFetchError):
    """
    Raised when a request was rejected before any HTTP status was received.

    In an in-page runtime this is almost always a missing
    ``Access-Control-Allow-Origin`` header on the remote host.
    """

    def __init__(self, url: str):
        super().__init__(
            f'Could not fetch SQLite database from "{url}". '
            "This is commonly caused by CORS or network restrictions. "
            "If you use a custom CDN/database URL, ensure it serves Access-Control-Allow-Origin. "
            "You can also pass a same-origin URL or raw database bytes to initialize_browser_database(...).",
            url=url,
        )
