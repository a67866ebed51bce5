"""
Load subsystem for Bundlee.

Purpose: Turn a serialized bundle back into an in-memory mapping.

Responsibilities:
- Read bundles from local files, HTTP(S) URLs or package resources
- Validate the JSON shape of every entry

Non-responsibilities:
- No decompression (entries stay encoded until looked up)
"""

from .load import (
    load_bundle,
    load_local,
    load_remote,
    load_module,
    parse_bundle,
    parse_bundle_text,
    LoadStrategy,
    ParseError,
    FetchError,
    DEFAULT_TIMEOUT,
)

__all__ = [
    "load_bundle",
    "load_local",
    "load_remote",
    "load_module",
    "parse_bundle",
    "parse_bundle_text",
    "LoadStrategy",
    "ParseError",
    "FetchError",
    "DEFAULT_TIMEOUT",
]
