"""Command-line interface for treefs.

This module provides the command-line interface for treefs, allowing users to create
file trees from YAML documents. It handles argument parsing, logging setup, and the
translation of library errors into exit codes.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error or invalid tree document
    126: Permission denied

Example:
    # Create a tree and print its root
    $ treefs tree.yaml

    # Display version information
    $ treefs --version
"""

import logging
import sys
from typing import List, Optional

from treefs.cli.argparser import create_parser, validate_args
from treefs.decoder import decode_yaml_file
from treefs.directory_plan.directory_plan import plan_for_model
from treefs.entry import TreeOptions
from treefs.exceptions import DecodeError, MaterializeError, TreeFsError
from treefs.materializer import Materializer


def configure_logging(verbosity: int) -> None:
    """Configure root logging for command-line use.

    Args:
        verbosity: Number of -v flags given.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the treefs command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error or invalid tree document
        126: Permission denied
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        document = decode_yaml_file(args.document)
        plan = plan_for_model(document.entries)

        if args.dry_run:
            print(plan.get_tree_representation())
            return

        options = TreeOptions(
            root=args.root if args.root is not None else document.options.root,
            overwrite_existing=args.overwrite if args.overwrite is not None else document.options.overwrite_existing,
            auto_cleanup=args.cleanup,
        )
        tree = Materializer(options).materialize(document.entries)
        print(tree.path)
        if args.print_tree:
            print(plan.get_tree_representation())
        tree.cleanup()

    except DecodeError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(2)
    except MaterializeError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        if isinstance(e.cause, PermissionError):
            sys.exit(126)
        sys.exit(1)
    except TreeFsError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
