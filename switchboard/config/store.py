#!/usr/bin/env python3
# switchboard/config/store.py
from __future__ import annotations

"""
Dotted-path configuration store (stdlib-only).

Sources (low → high):
  1) `data` mapping passed to the constructor (defaults, tests)
  2) One file: .toml, .json or .ini (chosen by suffix)
  3) Environment variables `<PREFIX>__A__B=value` → key `a.b`

Nested tables are flattened into lowercase dotted keys:
    {'sb': {'help': {'commands_per_page': 8}}} -> {'sb.help.commands_per_page': 8}
INI sections become the first key segment.

Typed lookups never raise: a value that cannot be coerced is logged and the
caller's default is returned.
"""

import configparser
import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


# ---------- file loaders ----------

def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_ini_file(path: Path) -> dict[str, Any]:
    cfg = configparser.ConfigParser(interpolation=None)
    try:
        with path.open(encoding="utf-8") as f:
            cfg.read_file(f)
    except (FileNotFoundError, configparser.Error):
        return {}
    return {sec: dict(cfg.items(sec)) for sec in cfg.sections()}


_LOADERS = {
    ".toml": _load_toml_file,
    ".json": _load_json_file,
    ".ini": _load_ini_file,
}


def load_file(path: Path) -> dict[str, Any]:
    """Load a mapping from a supported file; unknown suffixes load as empty."""
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        logger.warning("Unsupported configuration format: %s", path)
        return {}
    return loader(path)


def flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings to lowercase dotted keys; non-mapping leaves are kept as-is."""
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}.{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(flatten_mapping(v, key))
            else:
                flat[key.lower()] = v
    return flat


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_int(val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Expected integer, got: {val!r}") from exc


def _as_str(val: Any) -> str:
    if isinstance(val, (list, tuple)):
        return "\n".join(str(v) for v in val)
    return str(val)


def _as_str_list(val: Any) -> list[str]:
    if isinstance(val, (list, tuple)):
        return [str(v) for v in val]
    s = str(val).strip()
    return [part.strip() for part in s.split(",") if part.strip()] if s else []


# ---------- store ----------

class ConfigStore:
    """Read-only, reloadable configuration addressed by dotted paths."""

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        data: Mapping[str, Any] | None = None,
        env_prefix: str | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self._defaults = flatten_mapping(data or {})
        self._env_prefix = env_prefix.upper() if env_prefix else None
        self._values: dict[str, Any] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read all sources; previous values are discarded."""
        merged = dict(self._defaults)
        if self.path is not None:
            merged.update(flatten_mapping(load_file(self.path)))
        if self._env_prefix:
            marker = f"{self._env_prefix}__"
            for key, value in os.environ.items():
                if key.startswith(marker):
                    dotted = key[len(marker):].replace("__", ".").lower()
                    merged[dotted] = value
        self._values = merged
        logger.debug("Configuration loaded (%d keys) from %s",
                     len(merged), self.path or "<memory>")

    # ---------------- Lookup ----------------

    def __contains__(self, path: str) -> bool:
        return path.lower() in self._values

    def get(self, path: str, default: Any = None) -> Any:
        return self._values.get(path.lower(), default)

    def keys(self) -> list[str]:
        return list(self._values)

    def _typed(self, path: str, default: Any, coerce) -> Any:
        raw = self.get(path)
        if raw is None:
            return default
        try:
            return coerce(raw)
        except ValueError as exc:
            logger.warning("Invalid value for '%s': %s; using %r",
                           path, exc, default)
            return default

    def load_str(self, path: str, default: str = "") -> str:
        return self._typed(path, default, _as_str)

    def load_int(self, path: str, default: int = 0) -> int:
        return self._typed(path, default, _as_int)

    def load_bool(self, path: str, default: bool = False) -> bool:
        return self._typed(path, default, _as_bool)

    def load_str_list(self, path: str, default: list[str] | None = None) -> list[str]:
        return self._typed(path, list(default or []), _as_str_list)
