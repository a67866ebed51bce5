"""
Store subsystem for Bundlee.

Purpose: Serve files out of one loaded bundle.

Responsibilities:
- Own the loaded bundle and its decode cache
- Answer has()/get() lookups, decoding lazily and memoizing
- Preload the whole cache on demand
- Restore the bundle to the filesystem

Non-responsibilities:
- No HTTP serving
"""

from .store import BundleStore, NotLoadedError, NotFoundError

__all__ = [
    "BundleStore",
    "NotLoadedError",
    "NotFoundError",
]
