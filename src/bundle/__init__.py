# bundle/__init__.py
# Bundlee – Bundle subsystem: build and serialize bundles

from .bundle import (
    build_bundle,
    bundle_file,
    bundle_to_json,
    save_bundle,
    run_parallel,
    last_modified_ms,
    Bundle,
    Entry,
    NoInputFilesError,
    DEFAULT_MAX_WORKERS,
)

__all__ = [
    "build_bundle",
    "bundle_file",
    "bundle_to_json",
    "save_bundle",
    "run_parallel",
    "last_modified_ms",
    "Bundle",
    "Entry",
    "NoInputFilesError",
    "DEFAULT_MAX_WORKERS",
]
