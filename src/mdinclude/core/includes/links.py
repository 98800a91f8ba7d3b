"""Rewrite ./relative Markdown links in included content.

``{{#mdinclude ./my_folder/README.md}}`` splices README.md into a chapter
that lives one directory up, so ``[Guide](./guide.md)`` inside it must
become ``[Guide](my_folder/guide.md)`` to keep pointing at the same file.
"""
from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Optional

# Markdown image ![alt](./path) or link [text](./path)
RELATIVE_LINK_PATTERN = re.compile(
    r"""
    !\[(.*?)\]\((\./[^)]+)\)    # image
    |
    \[(.*?)\]\((\./[^)]+)\)     # link
    """,
    re.VERBOSE,
)


def insertion_folder(base_dir: Path, included_dir: Path) -> Optional[PurePosixPath]:
    """Return ``included_dir`` relative to ``base_dir``, or None if it is not nested."""
    try:
        relative = Path(included_dir).relative_to(Path(base_dir))
    except ValueError:
        return None
    return PurePosixPath(relative.as_posix())


def update_relative_links(content: str, base_dir: Path, included_dir: Path) -> str:
    """Prefix ./relative image and link targets in ``content`` with the insertion folder.

    Content is returned unchanged when ``included_dir`` is not under ``base_dir``.
    Paths in code spans, absolute paths and URLs do not match.
    """
    folder = insertion_folder(base_dir, included_dir)
    if folder is None:
        return content

    def replace(match: re.Match[str]) -> str:
        if match.group(2) is not None:
            template, text, link = "![{}]({})", match.group(1), match.group(2)
        else:
            template, text, link = "[{}]({})", match.group(3), match.group(4)
        link = link.replace("\\", "/")
        updated = (folder / link).as_posix()
        if link.endswith("/"):
            updated += "/"
        return template.format(text, updated)

    return RELATIVE_LINK_PATTERN.sub(replace, content)


__all__ = ["RELATIVE_LINK_PATTERN", "insertion_folder", "update_relative_links"]
