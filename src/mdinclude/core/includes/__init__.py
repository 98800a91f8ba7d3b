"""Include directive handling.

NOTE:
- Directive syntax lives in `mdinclude.core.includes.directives`.
- File reading and line/anchor slicing live in `.selection`.
- Link fixing lives in `.links`; recursion and splicing in `.engine`.
"""

from .directives import Anchor, Escaped, Include, LineRange, Occurrence, find_directives, parse_include_path
from .engine import MAX_DEPTH, Diagnostic, IncludeReport, IncludeResolver, substitute
from .links import update_relative_links
from .selection import read_file, take_anchored_lines, take_lines

__all__ = [
    "Anchor",
    "Escaped",
    "Include",
    "LineRange",
    "Occurrence",
    "find_directives",
    "parse_include_path",
    "MAX_DEPTH",
    "Diagnostic",
    "IncludeReport",
    "IncludeResolver",
    "substitute",
    "update_relative_links",
    "read_file",
    "take_anchored_lines",
    "take_lines",
]
