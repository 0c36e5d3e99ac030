#!/usr/bin/env python3

"""
Runtime configuration for airport_db.

Values can be overridden through environment variables.
"""

import os

# Native database location
DATABASE_PATH_ENV = "AIRPORT_DB_PATH"
BUNDLED_DATABASE_RESOURCE = "data/airports.sqlite"
DEVELOPMENT_DATABASE_DIR = "airport-db-data-sqlite"

# Browser assets
DEFAULT_CDN_DATABASE_URL = os.getenv(
    "AIRPORT_DB_CDN_URL",
    "https://cdn.tabletopandroid.com/v0.2.1/airports.sqlite",
)
DEFAULT_WASM_URL = "sqlite3"  # engine package loaded by the in-page interpreter

# HTTP
HTTP_TIMEOUT = float(os.getenv("AIRPORT_DB_HTTP_TIMEOUT", "30"))
USER_AGENT = "airport-db/0.1 (airport reference data)"

# Query limits
RESULT_LIMIT = 100

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
