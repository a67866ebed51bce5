# restore.py
# Bundlee – Restore subsystem: write a loaded bundle back to the filesystem

import os
import time
from pathlib import Path
from typing import Callable, Iterable, List

from bundle.bundle import Entry, run_parallel, DEFAULT_MAX_WORKERS
from ingest.ingest import sanitize_path, UnsafePathError


# ============================================================
# File Writing
# ============================================================

def destination_for(target_dir: str | os.PathLike, key: str) -> Path:
    """Resolve where a bundle key is written below ``target_dir``."""
    return Path(target_dir).joinpath(*sanitize_path(key).split("/"))


def write_entry(destination: Path, entry: Entry):
    """
    Write one decoded entry and stamp its modification time.

    Args:
        destination: File to create or overwrite
        entry: Decoded entry (``content`` is plain text)
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(entry.content.encode("utf-8"))

    timestamp_ns = entry.last_modified * 1_000_000
    os.utime(destination, ns=(timestamp_ns, timestamp_ns))


# ============================================================
# Restore
# ============================================================

def restore_files(
    keys: Iterable[str],
    get_entry: Callable[[str], Entry],
    target_dir: str | os.PathLike,
    max_workers: int = DEFAULT_MAX_WORKERS,
    verbose: bool = False,
) -> List[Path]:
    """
    Recreate bundled files below a directory.

    Every key is checked before anything is written: unsafe keys and keys
    that resolve to the same file raise UnsafePathError. Files are then decoded
    and written concurrently; all writes run to completion and the first
    failure (in key order) is raised.

    Args:
        keys: Bundle keys to restore
        get_entry: Returns the decoded Entry for a key
        target_dir: Directory to restore into (created if missing)
        max_workers: Maximum number of files written concurrently
        verbose: Print progress

    Returns:
        List of written file paths, in key order
    """
    start_time = time.time()
    keys = sorted(keys)
    destinations = {key: destination_for(target_dir, key) for key in keys}

    # Distinct keys such as "a/b.txt" and "a//b.txt" may share a destination
    claimed = {}
    for key, destination in destinations.items():
        if destination in claimed:
            raise UnsafePathError(
                f"Bundle paths {claimed[destination]!r} and {key!r} both restore to {destination}"
            )
        claimed[destination] = key

    if verbose:
        print("\n" + "=" * 70)
        print("RESTORE")
        print("=" * 70)
        print(f"\nRestoring {len(keys)} files to {target_dir}")

    def restore_one(key: str) -> Path:
        destination = destinations[key]
        write_entry(destination, get_entry(key))
        if verbose:
            print(f"  • {key}")
        return destination

    written = run_parallel(restore_one, keys, max_workers=max_workers)

    if verbose:
        elapsed = time.time() - start_time
        print(f"\n✓ Restored {len(written)} files in {elapsed:.2f}s")

    return written
