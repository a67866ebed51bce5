# load.py
# Bundlee – Load subsystem: read a serialized bundle from disk, HTTP or a package resource

import json
import math
import os
from enum import Enum
from importlib import resources
from typing import Any, Union

import requests

from bundle.bundle import Bundle, Entry


# ============================================================
# Exceptions
# ============================================================

class ParseError(Exception):
    """Bundle data is not valid JSON or does not have the bundle shape."""
    pass


class FetchError(Exception):
    """A remote bundle could not be downloaded."""
    pass


# ============================================================
# Configuration
# ============================================================

DEFAULT_TIMEOUT = 30  # seconds


class LoadStrategy(Enum):
    """Where a bundle is loaded from."""
    LOCAL = "local"
    REMOTE = "fetch"
    MODULE = "import"

    @classmethod
    def _missing_(cls, value):
        # Also accept member names: "remote", "module", "local"
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


ENTRY_FIELDS = {"content", "contentType", "lastModified"}


# ============================================================
# Shape Validation
# ============================================================

def parse_entry(path: str, value: Any) -> Entry:
    """Validate one JSON entry and convert it into an Entry."""
    if not isinstance(value, dict):
        raise ParseError(f"Entry {path!r} is not an object")

    keys = set(value.keys())
    if keys != ENTRY_FIELDS:
        missing = sorted(ENTRY_FIELDS - keys)
        extra = sorted(keys - ENTRY_FIELDS)
        raise ParseError(f"Entry {path!r} has wrong fields (missing: {missing}, unexpected: {extra})")

    content = value["content"]
    content_type = value["contentType"]
    last_modified = value["lastModified"]

    if not isinstance(content, str):
        raise ParseError(f"Entry {path!r}: content must be a string")
    if not isinstance(content_type, str):
        raise ParseError(f"Entry {path!r}: contentType must be a string")
    # bool is an int subclass
    if isinstance(last_modified, bool) or not isinstance(last_modified, (int, float)):
        raise ParseError(f"Entry {path!r}: lastModified must be a number")
    # json accepts NaN and Infinity literals
    if not math.isfinite(last_modified):
        raise ParseError(f"Entry {path!r}: lastModified must be a finite number")

    return Entry(
        content=content,
        content_type=content_type,
        last_modified=int(last_modified),
    )


def parse_bundle(data: Any) -> Bundle:
    """
    Convert a decoded JSON value into a bundle.

    Args:
        data: Value produced by ``json.loads``

    Returns:
        Mapping of bundle key to Entry

    Raises:
        ParseError: If the value does not have the bundle shape
    """
    if not isinstance(data, dict):
        raise ParseError(f"Bundle must be a JSON object, got {type(data).__name__}")
    return {path: parse_entry(path, value) for path, value in data.items()}


def parse_bundle_text(text: str, source: str = "<string>") -> Bundle:
    """Parse bundle JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in bundle {source}: {e}") from e
    return parse_bundle(data)


# ============================================================
# Load Strategies
# ============================================================

def load_local(path: str | os.PathLike) -> Bundle:
    """Load a bundle from a local file. Filesystem errors propagate unchanged."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_bundle_text(text, source=os.fspath(path))


def load_remote(url: str, timeout: float = DEFAULT_TIMEOUT) -> Bundle:
    """Download a bundle over HTTP(S)."""
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch bundle from {url}: {e}") from e

    if not resp.ok:
        raise FetchError(f"Failed to fetch bundle from {url}: HTTP {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON in bundle {url}: {e}") from e
    return parse_bundle(data)


def split_resource(source: str) -> tuple[str, str]:
    """
    Split a module source into (package, resource).

    Accepts ``"package.sub:assets/bundle.json"`` or ``"package/bundle.json"``.
    """
    if ":" in source:
        package, _, resource = source.partition(":")
    else:
        package, _, resource = source.replace("\\", "/").partition("/")
    if not package or not resource:
        raise ValueError(f"Module source must look like 'package:resource.json', got {source!r}")
    return package, resource


def load_module(source: str) -> Bundle:
    """Load a bundle shipped as a data file inside an importable package."""
    package, resource = split_resource(source)
    traversable = resources.files(package)
    for part in resource.split("/"):
        traversable = traversable.joinpath(part)
    text = traversable.read_text(encoding="utf-8")
    return parse_bundle_text(text, source=source)


def load_bundle(
    source: str | os.PathLike,
    strategy: Union[LoadStrategy, str] = LoadStrategy.LOCAL,
    timeout: float = DEFAULT_TIMEOUT,
) -> Bundle:
    """
    Load a serialized bundle.

    Args:
        source: File path, URL or "package:resource" depending on the strategy
        strategy: LoadStrategy or its string value ("local", "fetch", "import")
        timeout: HTTP timeout for the remote strategy

    Returns:
        Mapping of bundle key to (still encoded) Entry
    """
    strategy = LoadStrategy(strategy)

    if strategy is LoadStrategy.REMOTE:
        return load_remote(os.fspath(source), timeout=timeout)
    elif strategy is LoadStrategy.MODULE:
        return load_module(os.fspath(source))
    else:
        return load_local(source)
