# bundle.py
# Bundlee – Bundle subsystem: assemble a directory tree into a single JSON bundle

import json
import os
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from codec.codec import pack_file
from ingest.ingest import walk_files, bundle_key
from mediatype.mediatype import content_type_for


T = TypeVar("T")
R = TypeVar("R")


# ============================================================
# Exceptions
# ============================================================

class NoInputFilesError(Exception):
    """The scanned directory produced no files to bundle."""
    pass


# ============================================================
# Configuration
# ============================================================

# Bound on concurrently open files during build and restore
DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 1) + 4)


# ============================================================
# Output Format
# ============================================================

@dataclass(frozen=True)
class Entry:
    """One bundled file. ``content`` is encoded in a raw entry and plain text once decoded."""
    content: str
    content_type: str
    last_modified: int

    def to_json(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "contentType": self.content_type,
            "lastModified": self.last_modified,
        }


Bundle = Dict[str, Entry]


def bundle_to_json(bundle: Bundle) -> Dict[str, Dict[str, Any]]:
    """Convert a bundle into its JSON object form."""
    return {path: entry.to_json() for path, entry in bundle.items()}


def save_bundle(bundle: Bundle, output_file: str | os.PathLike):
    """Write a bundle to disk as compact JSON."""
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(bundle_to_json(bundle), f, separators=(",", ":"), ensure_ascii=False)


# ============================================================
# Parallel Execution
# ============================================================

def run_parallel(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[R]:
    """
    Run ``func`` over ``items`` on a bounded thread pool.

    Every task runs to completion. If any task failed, the exception of the
    first failed item (in input order) is raised, otherwise the results are
    returned in input order.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        futures = [ex.submit(func, item) for item in items]
        wait(futures)

    for future in futures:
        error = future.exception()
        if error is not None:
            raise error
    return [future.result() for future in futures]


# ============================================================
# Bundle Generation
# ============================================================

def last_modified_ms(path: str | os.PathLike) -> int:
    """File modification time in whole milliseconds since the epoch."""
    return os.stat(path).st_mtime_ns // 1_000_000


def bundle_file(file_path: str, base_path: str | os.PathLike) -> tuple[str, Entry]:
    """
    Read, compress and describe a single file.

    Returns:
        Tuple of (bundle key, Entry)
    """
    key = bundle_key(file_path, base_path)
    entry = Entry(
        content=pack_file(file_path),
        content_type=content_type_for(file_path),
        last_modified=last_modified_ms(file_path),
    )
    return key, entry


def build_bundle(
    base_path: str | os.PathLike,
    path: str | os.PathLike,
    extensions: Optional[Sequence[str]] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    verbose: bool = False,
) -> Bundle:
    """
    Bundle files from a directory into a mapping of bundle key to Entry.

    Args:
        base_path: Base directory that bundle keys are relative to
        path: Directory to bundle, relative to ``base_path``
        extensions: Optional list of extensions to include (e.g. [".txt"])
        max_workers: Maximum number of files processed concurrently
        verbose: Print progress

    Returns:
        The bundle

    Raises:
        NoInputFilesError: If no file matched
        OSError: If any file could not be read (no partial bundle is returned)
    """
    start_time = time.time()
    scan_root = os.path.join(os.fspath(base_path), os.fspath(path))

    if verbose:
        print("\n" + "=" * 70)
        print("BUNDLE")
        print("=" * 70)
        print(f"\nScanning: {scan_root}")
        if extensions:
            print(f"  Extensions: {', '.join(extensions)}")

    file_list = walk_files(scan_root, extensions)

    if not file_list:
        raise NoInputFilesError("No input files found")

    if verbose:
        print(f"  • Found {len(file_list)} files, compressing...")

    results = run_parallel(
        lambda file_path: bundle_file(file_path, base_path),
        file_list,
        max_workers=max_workers,
    )
    bundle = dict(results)

    if verbose:
        for key, entry in sorted(bundle.items()):
            print(f"  • {key} ({entry.content_type}, {len(entry.content)} chars)")
        elapsed = time.time() - start_time
        print(f"\n✓ Bundled {len(bundle)} files in {elapsed:.2f}s")

    return bundle
