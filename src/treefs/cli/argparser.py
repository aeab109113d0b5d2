"""Command-line argument parsing for treefs.

This module defines the command-line interface for treefs,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from treefs import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with treefs's options.
    """
    description = """
    treefs: Create a tree of files and directories from a YAML document.

    The document lists entries (files with content, empty files, directories and
    files copied from the host) and optional settings such as read-only. The tree
    is created under a fresh temporary directory unless a root is given, and the
    root path is printed on standard output.

    Trees created from the command line are kept after treefs exits unless
    --cleanup is given.
    """

    epilog = """
    Examples:
      # Create a tree in a new temporary directory and print its root
      treefs tree.yaml

      # Create the tree under a chosen root, replacing files that already exist
      treefs -r ./fixture -O tree.yaml

      # Show the planned tree without touching the disk
      treefs -n tree.yaml

      # Create the tree, show it, then delete it again
      treefs -p --cleanup tree.yaml
    """

    parser = argparse.ArgumentParser(
        prog="treefs",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"treefs {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "document",
        type=Path,
        help="YAML document describing the tree.",
    )
    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        metavar="DIR",
        help="Root directory for the tree. Overrides the document's 'root'. Created if missing.",
    )
    parser.add_argument(
        "-O",
        "--overwrite",
        action="store_true",
        default=None,
        help="Replace files that already exist. Overrides the document's 'override_file'.",
    )
    parser.add_argument(
        "-c",
        "--cleanup",
        action="store_true",
        help="Delete the tree again before exiting.",
    )
    parser.add_argument(
        "-p",
        "--print-tree",
        action="store_true",
        help="Print the planned tree after creating it.",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Validate the document and print the planned tree without creating anything.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for info, -vv for debug).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.dry_run and args.cleanup:
        raise ValueError("--cleanup has no effect with -n/--dry-run")
    if args.root is not None and args.root.exists() and not args.root.is_dir():
        raise ValueError(f"--root is not a directory: {args.root}")
