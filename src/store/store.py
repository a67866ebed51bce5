# store.py
# Bundlee – Store subsystem: hold one loaded bundle and serve decoded files from it

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from bundle.bundle import Bundle, Entry, DEFAULT_MAX_WORKERS
from codec.codec import unpack_text
from load.load import load_bundle, LoadStrategy, DEFAULT_TIMEOUT
from restore.restore import restore_files


# ============================================================
# Exceptions
# ============================================================

class NotLoadedError(Exception):
    """An operation needs a loaded bundle but none is loaded."""
    pass


class NotFoundError(KeyError):
    """The requested path is not part of the loaded bundle."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


# ============================================================
# Loaded State
# ============================================================

@dataclass
class _LoadedBundle:
    """A bundle together with the decode cache that belongs to it."""
    entries: Bundle
    cache: Dict[str, Entry] = field(default_factory=dict)


# ============================================================
# Bundle Store
# ============================================================

class BundleStore:
    """
    Owner of one loaded bundle and its decode cache.

    Loading replaces the bundle and its cache in a single assignment, so a
    reader sees either the old bundle with its cache or the new bundle with
    an empty cache, never a mix.
    """

    def __init__(self, bundle: Optional[Bundle] = None):
        self._state: Optional[_LoadedBundle] = None
        if bundle is not None:
            self.use(bundle)

    # ------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------

    @classmethod
    def load(
        cls,
        source: str | os.PathLike,
        strategy: Union[LoadStrategy, str] = LoadStrategy.LOCAL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "BundleStore":
        """Create a store and load a bundle into it."""
        store = cls()
        store.import_bundle(source, strategy, timeout=timeout)
        return store

    def import_bundle(
        self,
        source: str | os.PathLike,
        strategy: Union[LoadStrategy, str] = LoadStrategy.LOCAL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Replace the current bundle with one loaded from ``source``."""
        self.use(load_bundle(source, strategy, timeout=timeout))

    def use(self, bundle: Bundle):
        """Adopt an in-memory bundle (for example, one just built)."""
        self._state = _LoadedBundle(entries=dict(bundle))

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    # ------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------

    def has(self, path: str) -> bool:
        """Check if a file exists in the loaded bundle. Never raises."""
        state = self._state
        return state is not None and path in state.entries

    __contains__ = has

    def __len__(self) -> int:
        state = self._state
        return len(state.entries) if state is not None else 0

    def paths(self) -> List[str]:
        """Sorted bundle keys (empty when nothing is loaded)."""
        state = self._state
        return sorted(state.entries) if state is not None else []

    def _require_state(self) -> _LoadedBundle:
        state = self._state
        if state is None:
            raise NotLoadedError("No bundle loaded.")
        return state

    def get(self, path: str) -> Entry:
        """
        Get a file from the loaded bundle with its content decoded to text.

        Args:
            path: Bundle key, e.g. "static/index.html"

        Returns:
            Entry whose ``content`` is the original file text

        Raises:
            NotLoadedError: If no bundle is loaded
            NotFoundError: If the path is not in the bundle
            DecodeError: If the stored content is corrupt
        """
        return self._get(self._require_state(), path)

    def _get(self, state: _LoadedBundle, path: str) -> Entry:
        cached = state.cache.get(path)
        if cached is not None:
            return cached

        raw = state.entries.get(path)
        if raw is None:
            raise NotFoundError("Requested file not found in bundle.")

        decoded = Entry(
            content=unpack_text(raw.content),
            content_type=raw.content_type,
            last_modified=raw.last_modified,
        )
        state.cache[path] = decoded
        return decoded

    def preload(self):
        """Decode every file into the cache. The first decode failure aborts."""
        state = self._require_state()
        for path in list(state.entries):
            self._get(state, path)

    # ------------------------------------------------------------
    # Restore
    # ------------------------------------------------------------

    def restore(
        self,
        target_dir: str | os.PathLike,
        max_workers: int = DEFAULT_MAX_WORKERS,
        verbose: bool = False,
    ) -> List[Path]:
        """
        Write every bundled file below ``target_dir``.

        Returns:
            List of written file paths
        """
        state = self._require_state()
        return restore_files(
            state.entries.keys(),
            lambda path: self._get(state, path),
            target_dir,
            max_workers=max_workers,
            verbose=verbose,
        )
