"""
Auto-discovery CLI dispatcher for mdinclude.

Scans ``cli/commands`` for command modules and registers them. A command
module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

mdBook runs the preprocessor without arguments (process the book on stdin)
and as ``<cmd> supports <renderer>``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

DEFAULT_COMMAND = "preprocess"


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        module = importlib.import_module(f"mdinclude.cli.commands.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def _get_version() -> str:
    from mdinclude import __version__

    return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="mdbook-mdinclude",
        description="An mdbook preprocessor which includes files and updates their relative links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the mdinclude CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    from mdinclude.core.stdlib_logging import configure_stdlib_logging

    # Defaults and MDINCLUDE_LOG_LEVEL; the book's own table is applied later.
    configure_stdlib_logging(level=_bootstrap_log_level())

    parser = build_parser()
    args = parser.parse_args(list(argv) or [DEFAULT_COMMAND])

    func = getattr(args, "_func", None)
    if func is None:
        parser.print_help(sys.stderr)
        return 2
    return int(func(args) or 0)


def _bootstrap_log_level() -> str:
    from mdinclude.core.config import ConfigManager
    from mdinclude.core.exceptions import ConfigError

    try:
        return ConfigManager().load_config()["log_level"]
    except ConfigError:
        return "WARNING"


if __name__ == "__main__":
    sys.exit(main())
