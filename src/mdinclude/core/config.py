"""
mdinclude configuration management (YAML defaults, book table, environment).

Configuration sources (highest to lowest priority):
1. Environment variables: MDINCLUDE_*
2. The book's ``[preprocessor.mdinclude]`` table (from the host context)
3. Bundled defaults: mdinclude.data/config/defaults.yaml

The merged mapping is validated against the bundled JSON schema before use.
"""
from __future__ import annotations

import copy
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import jsonschema

from mdinclude.core.exceptions import ConfigError
from mdinclude.data import read_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "MDINCLUDE_"

# Keys mdBook itself reads from a [preprocessor.*] table.
HOST_KEYS = frozenset({"command", "renderer", "renderers", "before", "after", "optional"})


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@dataclass(frozen=True)
class PreprocessorSettings:
    """Validated, typed view of the merged configuration."""

    max_depth: int = 10
    rewrite_links: bool = True
    log_level: str = "WARNING"
    unsupported_renderers: Tuple[str, ...] = ("not-supported",)

    def supports_renderer(self, renderer: str) -> bool:
        """Markdown output works for nearly every renderer."""
        return renderer not in self.unsupported_renderers


class ConfigManager:
    """Load, merge, and validate preprocessor configuration."""

    def __init__(
        self,
        book_table: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.book_table = dict(book_table or {})
        self.environ = os.environ if environ is None else environ

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    @staticmethod
    def _normalize_key(key: str) -> str:
        return key.strip().lower().replace("-", "_")

    def _book_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for key, value in self.book_table.items():
            if key in HOST_KEYS:
                continue
            overrides[self._normalize_key(str(key))] = value
        return overrides

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for key in sorted(self.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == ENV_PREFIX:
                continue
            name = self._normalize_key(key[len(ENV_PREFIX):])
            raw = self.environ[key]
            if name == "unsupported_renderers":
                overrides[name] = [r.strip() for r in raw.split(",") if r.strip()]
            else:
                overrides[name] = self._coerce_type(raw)
        return overrides

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration mapping."""
        cfg = copy.deepcopy(read_yaml("config", "defaults.yaml"))
        cfg = deep_merge(cfg, self._book_overrides())
        cfg = deep_merge(cfg, self._env_overrides())

        if isinstance(cfg.get("log_level"), str):
            cfg["log_level"] = cfg["log_level"].strip().upper()

        if validate:
            self.validate(cfg)
        return cfg

    def validate(self, cfg: Dict[str, Any]) -> None:
        """Validate ``cfg`` against the bundled schema.

        Raises:
            ConfigError: listing every violation found.
        """
        schema = read_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors: List[str] = []
        for error in sorted(validator.iter_errors(cfg), key=lambda e: list(e.path)):
            location = ".".join(str(p) for p in error.path) or "<root>"
            errors.append(f"{location}: {error.message}")
        if errors:
            raise ConfigError(
                "Invalid mdinclude configuration:\n" + "\n".join(f"- {e}" for e in errors),
                context={"errors": errors},
            )

    def load_settings(self) -> PreprocessorSettings:
        cfg = self.load_config(validate=True)
        settings = PreprocessorSettings(
            max_depth=cfg["max_depth"],
            rewrite_links=cfg["rewrite_links"],
            log_level=cfg["log_level"],
            unsupported_renderers=tuple(cfg["unsupported_renderers"]),
        )
        logger.debug("Loaded settings: %s", settings)
        return settings


__all__ = ["ENV_PREFIX", "HOST_KEYS", "ConfigManager", "PreprocessorSettings", "deep_merge"]
