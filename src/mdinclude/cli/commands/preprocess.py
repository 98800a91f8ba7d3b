"""
mdinclude preprocess command.

SUMMARY: Process the [context, book] JSON on stdin (default when no command is given)

Reads the payload mdBook sends, expands every ``{{#mdinclude}}`` directive
and writes the processed book as JSON to stdout. Diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys

from mdinclude.core.book import parse_input, write_output
from mdinclude.core.config import ConfigManager
from mdinclude.core.exceptions import MdIncludeError
from mdinclude.core.preprocessor import MdInclude
from mdinclude.core.stdlib_logging import configure_stdlib_logging

SUMMARY = "Process the [context, book] JSON on stdin (default when no command is given)"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    """No arguments; input comes from stdin."""


def main(args: argparse.Namespace) -> int:
    try:
        ctx, book = parse_input(sys.stdin)
        settings = ConfigManager(book_table=ctx.preprocessor_table(MdInclude.NAME)).load_settings()
        configure_stdlib_logging(level=settings.log_level)

        preprocessor = MdInclude(ctx, settings=settings)
        processed = preprocessor.run(ctx, book)
    except MdIncludeError as e:
        logger.error("%s", e)
        return 1

    write_output(processed, sys.stdout)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
