"""End-to-end tests for the mdbook-mdinclude command line."""
from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest

from mdinclude.cli import main


def _payload(root: Path, content: str, table=None) -> str:
    context = {
        "root": str(root),
        "config": {"book": {"src": "src"}, "preprocessor": {"mdinclude": table or {}}},
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }
    book = {
        "sections": [
            {
                "Chapter": {
                    "name": "Intro",
                    "content": content,
                    "number": [1],
                    "sub_items": [],
                    "path": "intro.md",
                    "source_path": "intro.md",
                    "parent_names": [],
                }
            }
        ],
        "__non_exhaustive": None,
    }
    return json.dumps([context, book])


@pytest.mark.parametrize("renderer, code", [("html", 0), ("markdown", 0), ("not-supported", 1)])
def test_supports(renderer: str, code: int) -> None:
    assert main(["supports", renderer]) == code


def test_supports_respects_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDINCLUDE_UNSUPPORTED_RENDERERS", "pdf")

    assert main(["supports", "pdf"]) == 1


def test_supports_with_invalid_environment_fails(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("MDINCLUDE_MAX_DEPTH", "-5")

    assert main(["supports", "html"]) == 1
    assert "max_depth" in capsys.readouterr().err


def test_no_arguments_processes_stdin(write_files, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    root = write_files({"src/sub/README.md": "See [Doc](./guide.md)"})
    monkeypatch.setattr(sys, "stdin", io.StringIO(_payload(root, "# Intro\n{{#mdinclude sub/README.md}}\n")))

    assert main([]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["sections"][0]["Chapter"]["content"] == "# Intro\nSee [Doc](sub/guide.md)\n"


def test_missing_include_is_reported_on_stderr_only(write_files, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    root = write_files({"src/intro.md": ""})
    monkeypatch.setattr(sys, "stdin", io.StringIO(_payload(root, "{{#mdinclude gone.md}}")))

    assert main(["preprocess"]) == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out)["sections"][0]["Chapter"]["content"] == "{{#mdinclude gone.md}}"
    assert "gone.md" in captured.err


def test_malformed_stdin_fails(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("{"))

    assert main([]) == 1
    assert capsys.readouterr().out == ""


def test_invalid_book_table_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(_payload(tmp_path, "x", table={"max-depth": -3})))

    assert main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "max_depth" in captured.err


def test_expand_prints_result(write_files, capsys) -> None:
    root = write_files({"doc.md": "A {{#mdinclude parts/b.md}}", "parts/b.md": "![i](./i.png)"})

    assert main(["expand", str(root / "doc.md")]) == 0
    assert capsys.readouterr().out == "A ![i](parts/i.png)"


def test_expand_strict_fails_on_diagnostics(write_files, capsys) -> None:
    root = write_files({"doc.md": "{{#mdinclude missing.md}}"})

    assert main(["expand", "--strict", str(root / "doc.md")]) == 1
    assert capsys.readouterr().out == "{{#mdinclude missing.md}}"


def test_expand_max_depth_override(write_files, capsys) -> None:
    root = write_files({"loop.md": "x{{#mdinclude loop.md}}"})

    assert main(["expand", "--max-depth", "3", str(root / "loop.md")]) == 0
    # top-level text plus three nested levels
    assert capsys.readouterr().out == "xxxx"


def test_expand_unreadable_file(tmp_path: Path) -> None:
    assert main(["expand", str(tmp_path / "nope.md")]) == 1


def test_expand_rejects_negative_max_depth(write_files, capsys) -> None:
    root = write_files({"doc.md": "{{#mdinclude doc.md}}"})

    with pytest.raises(SystemExit) as exc_info:
        main(["expand", "--max-depth", "-1", str(root / "doc.md")])

    assert exc_info.value.code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "must be 0 or greater" in captured.err
