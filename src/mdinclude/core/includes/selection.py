"""Reading include targets and slicing them to a line range or anchor.

Anchors are delimited by marker lines in any comment syntax::

    // ANCHOR: setup
    ...
    // ANCHOR_END: setup

Lines carrying markers of other (nested) anchors are dropped from the
extracted region.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List

from ..exceptions import UnreadableFileError
from .directives import Anchor, LineRange, Region

ANCHOR_START = re.compile(r"ANCHOR:\s*(?P<anchor_name>[\w_-]+)")
ANCHOR_END = re.compile(r"ANCHOR_END:\s*(?P<anchor_name>[\w_-]+)")


def read_file(path: Path) -> str:
    """Read ``path`` as UTF-8 text.

    Raises:
        UnreadableFileError: chained to the underlying OS, decode or path error.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise UnreadableFileError(
            f"Could not read file {path}",
            context={"path": str(path)},
        ) from exc


def _lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def take_lines(text: str, line_range: LineRange) -> str:
    """Return the lines of ``text`` selected by ``line_range`` joined with ``\\n``."""
    start = line_range.start or 0
    lines = _lines(text)[start:]
    if line_range.end is not None:
        lines = lines[: max(line_range.end - start, 0)]
    return "\n".join(lines)


def take_anchored_lines(text: str, anchor: str) -> str:
    """Return the lines between the ``anchor`` start and end markers.

    An unknown anchor yields an empty string; a missing end marker runs to
    the end of the text.
    """
    retained: List[str] = []
    in_anchor = False

    for line in _lines(text):
        if in_anchor:
            end = ANCHOR_END.search(line)
            if end is not None and end.group("anchor_name") == anchor:
                break
            if end is None and ANCHOR_START.search(line) is None:
                retained.append(line)
        else:
            start = ANCHOR_START.search(line)
            if start is not None and start.group("anchor_name") == anchor:
                in_anchor = True

    return "\n".join(retained)


def select_region(text: str, region: Region) -> str:
    """Apply a parsed region selector to file text."""
    if isinstance(region, Anchor):
        return take_anchored_lines(text, region.name)
    if isinstance(region, LineRange):
        return take_lines(text, region)
    raise TypeError(f"Unsupported region selector: {region!r}")


__all__ = [
    "ANCHOR_START",
    "ANCHOR_END",
    "read_file",
    "take_lines",
    "take_anchored_lines",
    "select_region",
]
