"""Tests for layered preprocessor configuration."""
from __future__ import annotations

import pytest

from mdinclude.core.config import ConfigManager, PreprocessorSettings, deep_merge
from mdinclude.core.exceptions import ConfigError


def test_bundled_defaults() -> None:
    settings = ConfigManager(environ={}).load_settings()

    assert settings == PreprocessorSettings()
    assert settings.max_depth == 10
    assert settings.rewrite_links is True


def test_book_table_accepts_kebab_case_and_ignores_host_keys() -> None:
    table = {"command": "mdbook-mdinclude", "renderers": ["html"], "max-depth": 3, "log-level": "info"}

    settings = ConfigManager(book_table=table, environ={}).load_settings()

    assert settings.max_depth == 3
    assert settings.log_level == "INFO"


def test_environment_overrides_book_table() -> None:
    environ = {
        "MDINCLUDE_MAX_DEPTH": "4",
        "MDINCLUDE_REWRITE_LINKS": "false",
        "MDINCLUDE_UNSUPPORTED_RENDERERS": "pdf, epub",
    }

    settings = ConfigManager(book_table={"max-depth": 3}, environ=environ).load_settings()

    assert settings.max_depth == 4
    assert settings.rewrite_links is False
    assert settings.unsupported_renderers == ("pdf", "epub")


@pytest.mark.parametrize(
    "table, field",
    [
        ({"max-depth": -1}, "max_depth"),
        ({"max-depth": "ten"}, "max_depth"),
        ({"rewrite-links": "yes"}, "rewrite_links"),
        ({"log-level": "LOUD"}, "log_level"),
        ({"unknown-key": 1}, "unknown_key"),
    ],
)
def test_invalid_settings_raise(table, field) -> None:
    with pytest.raises(ConfigError) as exc_info:
        ConfigManager(book_table=table, environ={}).load_settings()

    assert field in str(exc_info.value)
    assert exc_info.value.context["errors"]


def test_supports_renderer() -> None:
    settings = PreprocessorSettings()

    assert settings.supports_renderer("html")
    assert settings.supports_renderer("markdown")
    assert not settings.supports_renderer("not-supported")


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": 1, "b": {"c": 2}}
    override = {"b": {"d": 3}}

    assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 3}}
    assert base == {"a": 1, "b": {"c": 2}}
