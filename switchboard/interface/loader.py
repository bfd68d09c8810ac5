#!/usr/bin/env python3
# switchboard/interface/loader.py
from __future__ import annotations

"""
Dynamic sub-command loader.

Features:
- Imports all public modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage.
- Registers everything a module exports as SUBCOMMANDS: SubCommand objects (as
  fresh copies, one per dispatcher) or zero-argument factories returning one (or None to opt out).
- A module-level ENABLED = False skips the module's factories without calling them.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Iterable

from switchboard.commands import SubCommand

if TYPE_CHECKING:
    from switchboard.commands import CommandDispatcher

logger = logging.getLogger(__name__)


def _as_factory(item: object):
    if isinstance(item, SubCommand):
        return item.copy
    if callable(item):
        return item
    return None


def _register_from_module(dispatcher: "CommandDispatcher", module: ModuleType) -> int:
    """Register SUBCOMMANDS exported by a module, if present."""
    exported = getattr(module, "SUBCOMMANDS", None)
    if not isinstance(exported, Iterable):
        return 0
    enabled = bool(getattr(module, "ENABLED", True))

    registered_count = 0
    for item in exported:
        factory = _as_factory(item)
        if factory is None:
            logger.warning("Ignoring %r in %s.SUBCOMMANDS", item, module.__name__)
            continue
        if dispatcher.register_subcommand_factory(factory, enabled):
            registered_count += 1
    return registered_count


def _iter_modules(package_name: str) -> Iterable[str]:
    package = importlib.import_module(package_name)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]
    if not package_paths:
        raise RuntimeError(
            f"'{package_name}' must be a package (folder) with modules.")

    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            if modinfo.name.startswith("_"):
                continue
            if modinfo.ispkg and (Path(base_path) / modinfo.name / "entrypoint.py").exists():
                yield f"{package_name}.{modinfo.name}.entrypoint"
            else:
                yield f"{package_name}.{modinfo.name}"


def load_subcommands(dispatcher: "CommandDispatcher", package_name: str = "plugins") -> int:
    """
    Import all modules under `package_name` and register their sub-commands.

    Supported layouts:
      1) Plain modules: plugins/foo.py            -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
                                                   -> import plugins.bar.entrypoint

    Modules are visited in name order so help order is stable.
    Returns the number of sub-commands registered.
    """
    loaded_modules = 0
    registered = 0
    for module_name in _iter_modules(package_name):
        module = importlib.import_module(module_name)
        loaded_modules += 1
        registered += _register_from_module(dispatcher, module)

    logger.info("Loaded %d sub-commands from %d modules in '%s'",
                registered, loaded_modules, package_name)
    return registered
