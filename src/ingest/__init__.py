"""
Ingest subsystem for Bundlee.

Purpose: Discover the files that go into a bundle.

Responsibilities:
- Recursively walk a directory tree
- Apply the optional extension allow-list
- Normalize file paths into forward-slash bundle keys
- Sanitize bundle keys before they touch the filesystem

Non-responsibilities:
- No reading of file contents
- No compression
"""

from .ingest import (
    walk_files,
    bundle_key,
    sanitize_path,
    file_extension,
    matches_extensions,
    IngestError,
    UnsupportedEntryError,
    UnsafePathError,
)

__all__ = [
    "walk_files",
    "bundle_key",
    "sanitize_path",
    "file_extension",
    "matches_extensions",
    "IngestError",
    "UnsupportedEntryError",
    "UnsafePathError",
]
