"""The ``mdinclude`` preprocessor: expand directives in every chapter of a book."""
from __future__ import annotations

import logging
from typing import Optional

from .book import Book, PreprocessorContext
from .config import ConfigManager, PreprocessorSettings
from .includes.engine import IncludeReport, IncludeResolver

logger = logging.getLogger(__name__)

# mdBook release line the book JSON layout was checked against.
MDBOOK_COMPAT_VERSION = "0.4"


def _major_minor(version: str) -> str:
    return ".".join(version.strip().split(".")[:2])


class MdInclude:
    """A preprocessor for ``{{#mdinclude}}``.

    Acts like mdBook's ``{{#include}}`` but updates relative links in the
    included content.
    """

    NAME = "mdinclude"

    def __init__(
        self,
        ctx: Optional[PreprocessorContext] = None,
        settings: Optional[PreprocessorSettings] = None,
    ) -> None:
        if settings is None:
            table = ctx.preprocessor_table(self.NAME) if ctx is not None else {}
            settings = ConfigManager(book_table=table).load_settings()
        self.settings = settings
        self.resolver = IncludeResolver(
            max_depth=settings.max_depth,
            rewrite_links=settings.rewrite_links,
        )

        if ctx is not None and ctx.mdbook_version and _major_minor(ctx.mdbook_version) != MDBOOK_COMPAT_VERSION:
            logger.warning(
                "The %s plugin was built against version %s of mdbook, "
                "but we're being called from version %s",
                self.NAME,
                MDBOOK_COMPAT_VERSION,
                ctx.mdbook_version,
            )

    def supports_renderer(self, renderer: str) -> bool:
        """Indicate whether a renderer is supported.

        This preprocessor emits Markdown, so it should support almost any renderer.
        """
        return self.settings.supports_renderer(renderer)

    def run(self, ctx: PreprocessorContext, book: Book, report: Optional[IncludeReport] = None) -> Book:
        """Expand directives in every chapter that has a source path.

        Each chapter is resolved from its own directory under the book's
        src dir; draft chapters (no path) are left untouched.
        """
        src_dir = ctx.src_dir

        for chapter in book.iter_chapters():
            chapter_path = chapter.path
            if chapter_path is None:
                continue
            base = src_dir / chapter_path.parent
            logger.debug("Processing chapter %r (%s)", chapter.name, chapter_path)
            chapter.content = self.resolver.substitute(chapter.content, base, chapter_path, 0, report)

        return book


__all__ = ["MDBOOK_COMPAT_VERSION", "MdInclude"]
