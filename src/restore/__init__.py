"""
Restore subsystem for Bundlee.

Purpose: Reconstruct the original directory tree from a bundle.

Responsibilities:
- Reject bundle keys that would escape the target directory
- Create parent directories as needed
- Write decoded file contents
- Restore access and modification times

Non-responsibilities:
- No decoding (entries come from the store's decode cache)
"""

from ingest.ingest import UnsafePathError

from .restore import restore_files, write_entry, destination_for

__all__ = [
    "restore_files",
    "write_entry",
    "destination_for",
    "UnsafePathError",
]
