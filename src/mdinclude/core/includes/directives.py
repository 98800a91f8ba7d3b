"""Directive scanning and parsing for ``{{#mdinclude}}``.

Handles:
- {{#mdinclude path}}            - Include entire file
- {{#mdinclude path:N}}          - Include line N (1-based)
- {{#mdinclude path:N:M}}        - Include lines N..M
- {{#mdinclude path:N:}}         - Include from line N to end of file
- {{#mdinclude path::M}}         - Include from start of file to line M
- {{#mdinclude path:anchor}}     - Include the region between ANCHOR markers
- \\{{#mdinclude ...}}           - Escaped, emitted literally without the backslash

Only the first whitespace-delimited token of the argument is the path;
further tokens are accepted and ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

ESCAPE_CHAR = "\\"
INCLUDE_DIRECTIVE = "mdinclude"

# Pattern for live and escaped directives
DIRECTIVE_PATTERN = re.compile(
    r"""
    \\\{\{\#.*?\}\}         # escaped directive
    |                       # or
    \{\{\s*                 # opening marker and whitespace
    \#([a-zA-Z0-9_]+)       # directive name
    \s+                     # separating whitespace
    ([^}]+)                 # target path and space separated properties
    \}\}                    # closing marker
    """,
    re.VERBOSE,
)

_LINE_NUMBER = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class LineRange:
    """Half-open range of 0-based line indices; ``None`` means unbounded."""

    start: Optional[int] = None
    end: Optional[int] = None


@dataclass(frozen=True)
class Anchor:
    """Named ``ANCHOR: name`` / ``ANCHOR_END: name`` region."""

    name: str


Region = Union[LineRange, Anchor]


@dataclass(frozen=True)
class Escaped:
    """Directive text to emit literally, minus its escape character."""


@dataclass(frozen=True)
class Include:
    """Include ``path`` (relative to the current base directory) sliced to ``region``."""

    path: Path
    region: Region = LineRange()


Selector = Union[Escaped, Include]


@dataclass(frozen=True)
class Occurrence:
    """One matched directive within a single scan of a string.

    Indices refer to the string that was scanned, never to any output built
    from it.
    """

    start_index: int
    end_index: int
    text: str
    selector: Selector


def _parse_line_number(value: str) -> Optional[int]:
    if _LINE_NUMBER.fullmatch(value):
        return int(value)
    return None


def parse_range_or_anchor(selector: Optional[str]) -> Region:
    """Parse the selector suffix that follows the first colon of a path.

    A leading non-numeric token is an anchor name. Otherwise the first token
    is a 1-based start line and the second an exclusive end line; a missing
    end selects a single line and an unparseable one leaves the end open.
    """
    parts = (selector or "").split(":", 2)

    first = parts[0]
    value = _parse_line_number(first)
    if value is not None:
        # line numbers are 1-based
        start: Optional[int] = max(value - 1, 0)
    elif first == "":
        start = None
    else:
        return Anchor(first)

    end_text = parts[1] if len(parts) > 1 else None
    if end_text is None:
        if start is None:
            return LineRange()
        return LineRange(start, start + 1)

    end = _parse_line_number(end_text)
    if start is not None:
        return LineRange(start, end)
    if end is not None:
        return LineRange(None, end)
    return LineRange()


def parse_include_path(token: str) -> Include:
    """Split ``path[:selector]`` on its first colon.

    Windows drive letters are not special-cased: ``C:\\doc.md`` splits at
    the drive colon.
    """
    path, _, selector = token.partition(":")
    return Include(Path(path), parse_range_or_anchor(selector))


def _selector_from_match(match: re.Match[str]) -> Optional[Selector]:
    name, rest = match.group(1), match.group(2)
    if name is not None and rest is not None:
        properties = rest.split()
        if name == INCLUDE_DIRECTIVE and properties:
            return parse_include_path(properties[0])
        return None
    if match.group(0).startswith(ESCAPE_CHAR):
        return Escaped()
    return None


def find_directives(contents: str) -> Iterator[Occurrence]:
    """Yield recognised directives in ``contents`` from left to right.

    Unknown directive names and directives without a path are skipped, so
    their text passes through untouched.
    """
    for match in DIRECTIVE_PATTERN.finditer(contents):
        selector = _selector_from_match(match)
        if selector is None:
            continue
        yield Occurrence(
            start_index=match.start(),
            end_index=match.end(),
            text=match.group(0),
            selector=selector,
        )


__all__ = [
    "ESCAPE_CHAR",
    "INCLUDE_DIRECTIVE",
    "DIRECTIVE_PATTERN",
    "LineRange",
    "Anchor",
    "Region",
    "Escaped",
    "Include",
    "Selector",
    "Occurrence",
    "parse_range_or_anchor",
    "parse_include_path",
    "find_directives",
]
