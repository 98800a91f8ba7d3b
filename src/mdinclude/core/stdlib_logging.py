from __future__ import annotations

import logging
import sys
from typing import TextIO

_MDINCLUDE_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "WARNING", stream: TextIO | None = None) -> None:
    """Send the diagnostic stream to stderr (never stdout).

    Stdout carries the processed book for the host, so any stream handler
    writing there is removed. Repeated calls replace the handler installed
    by the previous call.
    """
    global _MDINCLUDE_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout:
            root.removeHandler(h)

    if _MDINCLUDE_HANDLER is not None:
        root.removeHandler(_MDINCLUDE_HANDLER)
        _MDINCLUDE_HANDLER.close()
        _MDINCLUDE_HANDLER = None

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _MDINCLUDE_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler and restore the root level."""
    global _MDINCLUDE_HANDLER
    root = logging.getLogger()
    if _MDINCLUDE_HANDLER is not None:
        root.removeHandler(_MDINCLUDE_HANDLER)
        _MDINCLUDE_HANDLER.close()
    _MDINCLUDE_HANDLER = None
    root.setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
