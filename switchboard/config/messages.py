#!/usr/bin/env python3
# switchboard/config/messages.py
from __future__ import annotations

"""
Locale-aware message catalogs.

One file per locale in a directory (`en.toml`, `it_it.json`, ...), or an
in-memory `catalogs` mapping. Keys are dotted paths, e.g. `sb.help.header`.

Lookup chain for a locale such as `it_it`:
    it_it → it → default locale → caller's default text

Placeholders are substituted as `%name%` in mapping order, after legacy
`&`-codes in the template have been translated to markup. Values are
inserted verbatim.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from switchboard.config.store import flatten_mapping, load_file
from switchboard.ui.ansi import translate_legacy

if TYPE_CHECKING:
    from switchboard.commands.command_types import Sender

logger = logging.getLogger(__name__)

_CATALOG_SUFFIXES = (".toml", ".json")


def _normalize_locale(locale: str) -> str:
    return locale.strip().lower().replace("-", "_")


def apply_placeholders(text: str, placeholders: Mapping[str, Any] | None) -> str:
    """Replace each `%name%` with its value, in mapping order."""
    for name, value in (placeholders or {}).items():
        text = text.replace(f"%{name}%", str(value))
    return text


class MessageSource:
    """Resolve dotted message keys for a sender's locale."""

    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        catalogs: Mapping[str, Mapping[str, Any]] | None = None,
        default_locale: str = "en",
        legacy_codes: bool = True,
    ) -> None:
        self.directory = Path(directory) if directory is not None else None
        self.default_locale = _normalize_locale(default_locale)
        self.legacy_codes = legacy_codes
        self._static = {
            _normalize_locale(loc): flatten_mapping(data)
            for loc, data in (catalogs or {}).items()
        }
        self._catalogs: dict[str, dict[str, Any]] = {}
        self._missing: set[str] = set()
        self.reload()

    def reload(self) -> None:
        """Re-read catalog files; in-memory catalogs are kept underneath."""
        catalogs = {loc: dict(data) for loc, data in self._static.items()}
        if self.directory is not None and self.directory.is_dir():
            for file in sorted(self.directory.iterdir()):
                if file.suffix.lower() not in _CATALOG_SUFFIXES:
                    continue
                locale = _normalize_locale(file.stem)
                catalogs.setdefault(locale, {}).update(
                    flatten_mapping(load_file(file)))
        self._catalogs = catalogs
        self._missing.clear()
        logger.debug("Loaded message catalogs: %s", ", ".join(sorted(catalogs)) or "(none)")

    def locales(self) -> list[str]:
        return sorted(self._catalogs)

    # ---------------- Locale resolution ----------------

    def locale_for(self, sender: "Sender | None", actor_locale: bool = True) -> str:
        """Pick the locale for a sender: actor locale, then sender locale, then default."""
        if sender is not None:
            if actor_locale:
                actor = sender.as_physical_actor()
                locale = getattr(actor, "locale", None) if actor is not None else None
                if locale:
                    return _normalize_locale(locale)
            locale = getattr(sender, "locale", None)
            if locale:
                return _normalize_locale(locale)
        return self.default_locale

    def _chain(self, locale: str) -> list[str]:
        chain = [locale, locale.split("_", 1)[0], self.default_locale]
        return list(dict.fromkeys(chain))

    def _lookup(self, key: str, locale: str) -> Any:
        key = key.lower()
        for candidate in self._chain(locale):
            catalog = self._catalogs.get(candidate)
            if catalog is not None and key in catalog:
                return catalog[key]
        if key not in self._missing:
            self._missing.add(key)
            logger.debug("Message '%s' missing for locale '%s'; using default", key, locale)
        return None

    def _finish(self, template: str, placeholders: Mapping[str, Any] | None) -> str:
        if self.legacy_codes:
            template = translate_legacy(template)
        return apply_placeholders(template, placeholders)

    # ---------------- Public API ----------------

    def resolve(
        self,
        key: str,
        default: str,
        sender: "Sender | None" = None,
        actor_locale: bool = True,
        placeholders: Mapping[str, Any] | None = None,
    ) -> str:
        """Return the message for `key`; list values are joined with newlines."""
        value = self._lookup(key, self.locale_for(sender, actor_locale))
        if value is None:
            value = default
        if isinstance(value, (list, tuple)):
            value = "\n".join(str(v) for v in value)
        return self._finish(str(value), placeholders)

    def resolve_list(
        self,
        key: str,
        default: list[str] | None = None,
        sender: "Sender | None" = None,
        actor_locale: bool = True,
        placeholders: Mapping[str, Any] | None = None,
    ) -> list[str]:
        """Return the message lines for `key`; a scalar value becomes one line."""
        value = self._lookup(key, self.locale_for(sender, actor_locale))
        if value is None:
            value = list(default or [])
        if not isinstance(value, (list, tuple)):
            value = [value]
        return [self._finish(str(v), placeholders) for v in value]

    @property
    def missing_keys(self) -> set[str]:
        """Keys requested since the last reload that fell back to default text."""
        return set(self._missing)
