from .fallback import FallbackChain, Strategy
from .assets import (
    BundledSource,
    BytesSource,
    UrlSource,
    build_database_chain,
    fetch_database_bytes,
    resolve_wasm_url,
)

__all__ = [
    'FallbackChain',
    'Strategy',
    'BundledSource',
    'BytesSource',
    'UrlSource',
    'build_database_chain',
    'fetch_database_bytes',
    'resolve_wasm_url',
]
