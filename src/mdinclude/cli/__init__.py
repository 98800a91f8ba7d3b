"""
mdinclude CLI package.

``mdbook-mdinclude`` with no command runs the preprocessor over the book
read from stdin; commands are auto-discovered from ``cli/commands/``.
"""
from ._dispatcher import build_parser, main

__all__ = ["build_parser", "main"]
