"""Host payload model for the mdBook preprocessor protocol.

mdBook writes ``[context, book]`` as JSON to the preprocessor's stdin and
reads the (modified) book back from stdout. Only the fields this
preprocessor needs are interpreted; everything else round-trips untouched.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple

from .exceptions import BookFormatError

DEFAULT_SRC_DIR = "src"


@dataclass
class PreprocessorContext:
    """The ``context`` half of the host payload."""

    root: Path
    config: Dict[str, Any] = field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "PreprocessorContext":
        if not isinstance(data, dict) or "root" not in data:
            raise BookFormatError("Preprocessor context must be an object with a 'root' key")
        return cls(
            root=Path(data["root"]),
            config=data.get("config") or {},
            renderer=str(data.get("renderer") or ""),
            mdbook_version=str(data.get("mdbook_version") or ""),
        )

    @property
    def src_dir(self) -> Path:
        """Absolute directory chapter paths are relative to."""
        book = self.config.get("book") or {}
        return self.root / str(book.get("src") or DEFAULT_SRC_DIR)

    def preprocessor_table(self, name: str) -> Dict[str, Any]:
        """Return the book's ``[preprocessor.<name>]`` table (empty if absent)."""
        table = (self.config.get("preprocessor") or {}).get(name)
        return dict(table) if isinstance(table, dict) else {}


@dataclass
class Chapter:
    """Mutable view over one chapter object of the book JSON."""

    data: Dict[str, Any]

    @property
    def name(self) -> str:
        return str(self.data.get("name", ""))

    @property
    def path(self) -> Optional[PurePosixPath]:
        """Source path relative to the book's src dir; None for draft chapters."""
        raw = self.data.get("path")
        return PurePosixPath(raw) if raw else None

    @property
    def content(self) -> str:
        return str(self.data.get("content", ""))

    @content.setter
    def content(self, value: str) -> None:
        self.data["content"] = value


class Book:
    """The ``book`` half of the host payload.

    mdBook 0.4 names the top-level list ``sections``; newer releases use
    ``items``. Both are accepted and written back under the same key.
    """

    ITEM_KEYS = ("sections", "items")

    def __init__(self, data: Dict[str, Any]) -> None:
        if not isinstance(data, dict):
            raise BookFormatError("Book must be a JSON object")
        self.data = data
        self._items_key = next((k for k in self.ITEM_KEYS if k in data), None)
        if self._items_key is None:
            raise BookFormatError(f"Book has none of the keys {list(self.ITEM_KEYS)}")

    @property
    def items(self) -> List[Any]:
        return self.data[self._items_key]

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first, parents before their sub-items."""
        yield from self._walk(self.items)

    def _walk(self, items: List[Any]) -> Iterator[Chapter]:
        for item in items:
            # "Separator" and {"PartTitle": ...} carry no content
            if not isinstance(item, dict) or "Chapter" not in item:
                continue
            chapter = item["Chapter"]
            yield Chapter(chapter)
            yield from self._walk(chapter.get("sub_items") or [])

    def to_json(self) -> Dict[str, Any]:
        return self.data


def parse_input(stream: TextIO) -> Tuple[PreprocessorContext, Book]:
    """Parse the ``[context, book]`` payload from ``stream``.

    Raises:
        BookFormatError: If the payload is not valid JSON of that shape.
    """
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        raise BookFormatError(f"Unable to parse the input: {exc}") from exc

    if not isinstance(payload, list) or len(payload) != 2:
        raise BookFormatError("Expected a JSON array of [context, book]")
    context, book = payload
    return PreprocessorContext.from_json(context), Book(book)


def write_output(book: Book, stream: TextIO) -> None:
    json.dump(book.to_json(), stream)


__all__ = ["DEFAULT_SRC_DIR", "PreprocessorContext", "Chapter", "Book", "parse_input", "write_output"]
