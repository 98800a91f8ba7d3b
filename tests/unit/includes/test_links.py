"""Tests for relative link rewriting in included content."""
from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from mdinclude.core.includes.links import insertion_folder, update_relative_links

PROJECT = Path("/long/concrete/path/to/project/")
SUBFOLDER = Path("/long/concrete/path/to/project/with/subfolder/")


@pytest.mark.parametrize(
    "content, expected",
    [
        (
            "My image here: ![my image](./.hidden/subfolder/image/image.png), and it is really cool!",
            "My image here: ![my image](with/subfolder/.hidden/subfolder/image/image.png), and it is really cool!",
        ),
        (
            "My image here: [my link](./.hidden/subfolder/tests/test.rs), and it is really cool!",
            "My image here: [my link](with/subfolder/.hidden/subfolder/tests/test.rs), and it is really cool!",
        ),
    ],
)
def test_update_relative_links(content: str, expected: str) -> None:
    assert update_relative_links(content, PROJECT, SUBFOLDER) == expected


def test_skips_code_span_paths() -> None:
    content = "My image here: `./.hidden/subfolder/image/image.png`, and it is really cool!"

    assert update_relative_links(content, PROJECT, SUBFOLDER) == content


def test_image_gets_insertion_folder_prefix() -> None:
    out = update_relative_links("See ![x](./img.png).", Path("/a/b/"), Path("/a/b/c/d/"))

    assert out == "See ![x](c/d/img.png)."


def test_leaves_non_relative_references() -> None:
    content = "[site](https://example.com) ![abs](/img.png) [up](../x.md) [bare](x.md)"

    assert update_relative_links(content, Path("/a"), Path("/a/b")) == content


def test_rewrites_every_reference_on_a_line() -> None:
    out = update_relative_links("[one](./1.md) and [two](./2.md#part)", Path("/a"), Path("/a/sub"))

    assert out == "[one](sub/1.md) and [two](sub/2.md#part)"


def test_keeps_trailing_slash() -> None:
    assert update_relative_links("[dir](./docs/)", Path("/a"), Path("/a/sub")) == "[dir](sub/docs/)"


def test_not_nested_is_unchanged() -> None:
    content = "![x](./img.png)"

    assert update_relative_links(content, Path("/a/b"), Path("/x/y")) == content


def test_insertion_folder() -> None:
    assert insertion_folder(Path("/a/b"), Path("/a/b/c/d")) == PurePosixPath("c/d")
    assert insertion_folder(Path("/a/b"), Path("/elsewhere")) is None
