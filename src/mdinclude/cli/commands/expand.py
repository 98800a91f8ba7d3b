"""
mdinclude expand command.

SUMMARY: Expand directives in a single Markdown file and print the result

Resolves includes relative to the file's own directory, exactly as for a
chapter, without needing an mdBook payload.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mdinclude.core.config import ConfigManager
from mdinclude.core.exceptions import MdIncludeError
from mdinclude.core.includes import IncludeReport, IncludeResolver
from mdinclude.core.includes.selection import read_file

SUMMARY = "Expand directives in a single Markdown file and print the result"

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("file", type=Path, help="Markdown file to expand")
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help="Override the nesting limit for nested includes",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any directive could not be expanded",
    )


def main(args: argparse.Namespace) -> int:
    try:
        settings = ConfigManager().load_settings()
        content = read_file(args.file)
    except MdIncludeError as e:
        logger.error("%s", e)
        return 1

    max_depth = settings.max_depth if args.max_depth is None else args.max_depth
    resolver = IncludeResolver(max_depth=max_depth, rewrite_links=settings.rewrite_links)
    report = IncludeReport()
    sys.stdout.write(resolver.substitute(content, args.file.parent, args.file, 0, report))

    if args.strict and report.diagnostics:
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
