# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""Tanager CLI - open today's journal entry in your editor."""

import argparse
import sys
from datetime import datetime
from typing import Optional

from tanager import __version__
from tanager.core.config import DEFAULT_CONFIG_PATH, resolve_config
from tanager.core.dispatcher import EntryDispatcher, run
from tanager.core.errors import TanagerError
from tanager.logging import configure_logging, get_logger, log_error
from tanager.utils.dates import parse_date_phrase
from tanager.utils.terminal import safe_print


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for tanager."""
    parser = argparse.ArgumentParser(
        prog="tanager",
        description="Open a journal entry for today (or another day) in your editor.",
        epilog="Example: tanager journal meeting with tyrion  ->  journal/2017/2017-03-27_meeting-with-tyrion.md",
    )
    parser.add_argument(
        "words",
        nargs="*",
        help="Optional notebook name or alias, then the words of the entry title",
    )
    parser.add_argument(
        "--config-file",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file. Defaults to {DEFAULT_CONFIG_PATH}",
    )
    parser.add_argument(
        "--date",
        "-d",
        metavar="DATE",
        help='Date of the entry. yesterday, dec5, "dec 5", etc',
    )
    parser.add_argument(
        "--editor-cmd",
        "-e",
        metavar="CMD",
        help="Editor used to edit. Defaults to config editorCmd, $VISUAL, then $EDITOR",
    )
    parser.add_argument(
        "--recent",
        "-r",
        dest="edit_recent",
        action="store_true",
        help="Edit the most recently modified file in a notebook (same as --last)",
    )
    parser.add_argument(
        "--last",
        "-l",
        dest="edit_recent",
        action="store_true",
        help="Edit the last modified file in a notebook (same as --recent)",
    )
    parser.add_argument(
        "--pwd",
        action="store_true",
        help="Print the path to the notebook",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[list[str]] = None, dispatcher: Optional[EntryDispatcher] = None) -> int:
    """
    Main entry point for the tanager CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        dispatcher: Entry dispatcher to use (defaults to the real editor and filesystem)

    Returns:
        Exit code (0 for success)
    """
    # Options may come between title words: tanager journal -d yesterday meeting
    parsed = create_parser().parse_intermixed_args(argv)

    try:
        date = parse_date_phrase(parsed.date) if parsed.date else datetime.now()
        config = resolve_config(parsed)
        configure_logging(config.logging)
        get_logger("cli").debug(f"tanager {__version__}: words={parsed.words}, date={date:%Y-%m-%d}")

        return run(config, date, parsed.words, dispatcher=dispatcher)
    except TanagerError as e:
        log_error("tanager", e)
        safe_print(f"❌ {e}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
