"""
mdinclude supports command.

SUMMARY: Check whether a renderer is supported by this preprocessor

Signals support through the exit status: 0 if supported, 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys

from mdinclude.core.exceptions import MdIncludeError
from mdinclude.core.preprocessor import MdInclude

SUMMARY = "Check whether a renderer is supported by this preprocessor"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("renderer", help="Renderer name (e.g. 'html')")


def main(args: argparse.Namespace) -> int:
    try:
        preprocessor = MdInclude()
    except MdIncludeError as e:
        logger.error("%s", e)
        return 1

    return 0 if preprocessor.supports_renderer(args.renderer) else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
