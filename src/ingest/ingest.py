# ingest.py
# Bundlee – Ingest subsystem: walk a directory tree into a list of candidate files

import os
import stat
from pathlib import PurePosixPath
from typing import List, Optional, Sequence


# ============================================================
# Exceptions
# ============================================================

class IngestError(Exception):
    pass


class UnsupportedEntryError(IngestError, OSError):
    """A symlink or special file was found while walking the tree."""
    pass


class UnsafePathError(IngestError, ValueError):
    """A bundle path would resolve outside of its base directory."""
    pass


# ============================================================
# Extension Filtering
# ============================================================

def file_extension(name: str) -> str:
    """
    Return the extension of a file name, leading dot included.

    Dotfiles such as ``.bashrc`` have no extension. No case folding is
    applied, ``page.HTML`` has the extension ``.HTML``.
    """
    return os.path.splitext(name)[1]


def matches_extensions(name: str, extensions: Optional[Sequence[str]]) -> bool:
    """Check if a file name passes the extension allow-list (None allows all)."""
    if extensions is None:
        return True
    return file_extension(name) in extensions


# ============================================================
# Directory Traversal
# ============================================================

def walk_files(
    root: str | os.PathLike,
    extensions: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Recursively list every regular file below a directory.

    Args:
        root: Directory to walk
        extensions: Optional allow-list of extensions (e.g. [".html", ".css"])

    Returns:
        List of file paths rooted at ``root`` (order is not significant)

    Raises:
        UnsupportedEntryError: If a symlink or special file is encountered
        OSError: If the root is missing or a directory cannot be read
    """
    files: List[str] = []

    def visit(directory: str):
        with os.scandir(directory) as it:
            for entry in it:
                mode = entry.stat(follow_symlinks=False).st_mode
                if stat.S_ISDIR(mode):
                    visit(entry.path)
                elif stat.S_ISREG(mode):
                    if matches_extensions(entry.name, extensions):
                        files.append(entry.path)
                elif stat.S_ISLNK(mode):
                    raise UnsupportedEntryError(f"Symbolic links are not supported: {entry.path}")
                else:
                    raise UnsupportedEntryError(f"Not a regular file: {entry.path}")

    visit(os.fspath(root))
    return files


# ============================================================
# Path Normalization
# ============================================================

def bundle_key(file_path: str | os.PathLike, base_path: str | os.PathLike) -> str:
    """
    Compute the bundle key of a file: its path relative to ``base_path``
    with forward slashes on every platform.
    """
    relative = os.path.relpath(os.fspath(file_path), os.fspath(base_path))
    return relative.replace("\\", "/")


def sanitize_path(raw: str) -> str:
    """
    Prevent:
      - ../ traversal
      - absolute paths
      - backslashes
      - leading slashes
    Returns a normalized forward-slash path.
    """
    if not raw or raw.strip() == "":
        raise UnsafePathError(f"Invalid empty path {raw!r}")

    p = PurePosixPath(raw.replace("\\", "/"))

    # Reject absolute paths
    if p.is_absolute():
        raise UnsafePathError(f"Absolute path not allowed: {raw}")

    # Reject traversal
    for part in p.parts:
        if part == "..":
            raise UnsafePathError(f"Traversal not allowed: {raw}")

    # Windows drive letters survive PurePosixPath
    if p.parts and p.parts[0].endswith(":"):
        raise UnsafePathError(f"Drive paths not allowed: {raw}")

    return "/".join(p.parts)
