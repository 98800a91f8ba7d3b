"""Recursive substitution of ``{{#mdinclude}}`` directives.

For each directive found in a text (left to right), the text since the
previous directive is copied through unchanged and the directive is
replaced by the selected content of its target file. Relative links in
that content are rewritten for the including location, and the content is
itself scanned for directives, resolving paths from the included file's
directory. Nesting stops at ``max_depth``; cyclic includes therefore
terminate with an error diagnostic instead of recursing forever.

Failures never abort a document: an unreadable target leaves its
directive text in place and is reported on the diagnostic stream.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..exceptions import DepthExceededError, MdIncludeError
from .directives import ESCAPE_CHAR, Escaped, Include, Occurrence, find_directives
from .links import update_relative_links
from .selection import read_file, select_region

logger = logging.getLogger(__name__)

MAX_DEPTH = 10

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem met while expanding one directive."""

    level: int
    source: str
    directive: str
    message: str
    causes: tuple[str, ...] = ()


@dataclass
class IncludeReport:
    """Optional collector for what a substitution run did."""

    includes_resolved: List[Path] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def record_include(self, path: Path) -> None:
        """Record that an include target was read."""
        self.includes_resolved.append(path)

    def record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level >= logging.ERROR]


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    seen = {id(exc)}
    cause = exc.__cause__ or exc.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        yield cause
        cause = cause.__cause__ or cause.__context__


class IncludeResolver:
    """Expand ``{{#mdinclude}}`` directives recursively.

    The resolver holds settings only; base directory, depth and the
    optional report travel down each call chain as arguments, so one
    instance can serve many documents concurrently.
    """

    def __init__(self, max_depth: int = MAX_DEPTH, rewrite_links: bool = True) -> None:
        """Initialize with nesting limit and link rewriting switch.

        Args:
            max_depth: Maximum depth for nested includes (default 10)
            rewrite_links: Whether to fix ./relative links in included content
        """
        self.max_depth = max_depth
        self.rewrite_links = rewrite_links

    def substitute(
        self,
        content: str,
        base_dir: PathLike,
        source: PathLike,
        depth: int = 0,
        report: Optional[IncludeReport] = None,
    ) -> str:
        """Return ``content`` with every directive expanded.

        Args:
            content: Text to scan
            base_dir: Directory that include paths in ``content`` resolve from
            source: Originating document, used in diagnostics
            depth: Current nesting level
            report: Optional collector for includes and diagnostics

        Returns:
            Expanded text; non-directive text is preserved exactly
        """
        base_dir = Path(base_dir)
        previous_end_index = 0
        replaced: List[str] = []

        for occurrence in find_directives(content):
            replaced.append(content[previous_end_index:occurrence.start_index])
            selector = occurrence.selector

            if isinstance(selector, Escaped):
                replaced.append(occurrence.text[len(ESCAPE_CHAR):])
            elif isinstance(selector, Include):
                try:
                    replaced.append(
                        self._render_include(occurrence, selector, base_dir, source, depth, report)
                    )
                except MdIncludeError as exc:
                    self._report_failure(occurrence, source, exc, report)
                    replaced.append(occurrence.text)
            else:
                raise TypeError(f"Unsupported directive selector: {selector!r}")

            previous_end_index = occurrence.end_index

        replaced.append(content[previous_end_index:])
        return "".join(replaced)

    def _render_include(
        self,
        occurrence: Occurrence,
        selector: Include,
        base_dir: Path,
        source: PathLike,
        depth: int,
        report: Optional[IncludeReport],
    ) -> str:
        target = base_dir / selector.path
        included_dir = target.parent

        new_content = select_region(read_file(target), selector.region)
        if report is not None:
            report.record_include(target)

        if self.rewrite_links and included_dir != base_dir:
            new_content = update_relative_links(new_content, base_dir, included_dir)

        if depth < self.max_depth:
            return self.substitute(new_content, included_dir, source, depth + 1, report)

        self._report_depth_exceeded(occurrence, source, depth, report)
        return ""

    def _report_failure(
        self,
        occurrence: Occurrence,
        source: PathLike,
        exc: MdIncludeError,
        report: Optional[IncludeReport],
    ) -> None:
        logger.warning('Error updating "%s" in %s, %s', occurrence.text, source, exc)
        causes = tuple(str(cause) for cause in _iter_causes(exc))
        for cause in causes:
            logger.warning("Caused By: %s", cause)

        if report is not None:
            report.record(
                Diagnostic(
                    level=logging.WARNING,
                    source=str(source),
                    directive=occurrence.text,
                    message=str(exc),
                    causes=causes,
                )
            )

    def _report_depth_exceeded(
        self,
        occurrence: Occurrence,
        source: PathLike,
        depth: int,
        report: Optional[IncludeReport],
    ) -> None:
        error = DepthExceededError(
            f"Stack depth exceeded in {source}. Check for cyclic includes",
            context={"source": str(source), "directive": occurrence.text, "depth": depth},
        )
        logger.error("%s", error)
        if report is not None:
            report.record(
                Diagnostic(
                    level=logging.ERROR,
                    source=str(source),
                    directive=occurrence.text,
                    message=str(error),
                )
            )


def substitute(
    content: str,
    base_dir: PathLike,
    source: PathLike,
    depth: int = 0,
    *,
    max_depth: int = MAX_DEPTH,
    report: Optional[IncludeReport] = None,
) -> str:
    """Expand directives in ``content`` with a default-configured resolver."""
    return IncludeResolver(max_depth=max_depth).substitute(content, base_dir, source, depth, report)


__all__ = ["MAX_DEPTH", "Diagnostic", "IncludeReport", "IncludeResolver", "substitute"]
