#!/usr/bin/env python3
"""
main.py
Bundlee – Command line entry point

Generates a compressed JSON bundle of static assets, or restores a bundle
back to the filesystem.

Usage:
    bundlee --bundle <target_path> <output_bundle_file>
    bundlee -b <target_path> <output_bundle_file>
    bundlee --restore <bundle_file> [<target_path>]
    bundlee -r <bundle_file> [<target_path>]
    bundlee --help
    bundlee --version

Examples:
    bundlee --bundle static bundle.json
    bundlee -b static bundle.json --ext .html --ext .css
    bundlee --restore bundle.json restored/
"""

import argparse
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from bundle import build_bundle, save_bundle, DEFAULT_MAX_WORKERS
from store import BundleStore


VERSION = "0.9.4"


# ============================================================
# Configuration
# ============================================================

@dataclass
class BundleConfig:
    """Configuration for a CLI run."""
    base_path: str = field(default_factory=os.getcwd)
    extensions: Optional[List[str]] = None
    max_workers: int = DEFAULT_MAX_WORKERS
    verbose: bool = True


# ============================================================
# Commands
# ============================================================

def run_bundle(path: str, output_file: str, config: BundleConfig) -> int:
    """
    Bundle ``path`` (relative to the base path) into ``output_file``.

    Returns:
        Number of bundled files
    """
    bundle = build_bundle(
        config.base_path,
        path,
        config.extensions,
        max_workers=config.max_workers,
        verbose=config.verbose,
    )
    save_bundle(bundle, output_file)
    print(f"Bundle generated and saved to '{output_file}'")
    return len(bundle)


def run_restore(bundle_file: str, target_path: Optional[str], config: BundleConfig) -> int:
    """
    Restore ``bundle_file`` into ``target_path`` (default: the base path).

    Returns:
        Number of restored files
    """
    store = BundleStore.load(bundle_file)
    target_dir = os.path.join(config.base_path, target_path or "")
    written = store.restore(
        target_dir,
        max_workers=config.max_workers,
        verbose=config.verbose,
    )
    print(f"Bundle restored to {target_path or 'current directory.'}")
    return len(written)


# ============================================================
# CLI Interface
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlee",
        description="Bundlee - generate a compressed JSON bundle of static assets and restore it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --bundle static bundle.json
  %(prog)s -b static bundle.json --ext .html --ext .css
  %(prog)s --restore bundle.json restored/
        """
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--bundle", "-b",
        metavar="PATH",
        help="Bundle files from the specified path"
    )
    action.add_argument(
        "--restore", "-r",
        metavar="BUNDLE",
        help="Restore a bundle to the filesystem"
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Output bundle file (--bundle) or target directory (--restore)"
    )
    parser.add_argument(
        "--ext", "-e",
        action="append",
        dest="extensions",
        metavar="EXT",
        help="Only bundle files with this extension, e.g. .html (repeatable)"
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Maximum number of files processed concurrently (default: {DEFAULT_MAX_WORKERS})"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the final result"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=VERSION,
    )
    return parser


def print_error_and_help(parser: argparse.ArgumentParser, message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    parser.print_help()
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing. Returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.bundle and not args.restore:
        return print_error_and_help(parser, "No action specified, provide either --bundle or --restore.")

    if args.bundle and not args.target:
        return print_error_and_help(parser, "Missing output bundle file")

    config = BundleConfig(
        extensions=args.extensions,
        max_workers=args.workers,
        verbose=not args.quiet,
    )

    try:
        if args.bundle:
            run_bundle(args.bundle, args.target, config)
        else:
            run_restore(args.restore, args.target, config)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
