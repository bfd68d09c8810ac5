#!/usr/bin/env python3
# switchboard/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the Switchboard console.

Goals:
- Build configuration, message catalogs and the root command in a fixed order.
- Load sub-commands from the plugins package.
- Maintain clear status output for each boot step.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable
import logging

from switchboard.commands import CommandDispatcher
from switchboard.config import ConfigStore, MessageSource
from switchboard.interface.loader import load_subcommands
from switchboard.ui import colorize, enable_windows_vt, init_logger, print_line

# Values used when neither the config file nor the environment sets them
DEFAULTS: dict[str, Any] = {
    "switchboard": {
        "command": "sb",
        "multi_page_help": True,
        "plugins": "plugins",
        "messages": "messages",
        "locale": "en",
        "log_level": "INFO",
        "log_file": "",
    },
    "console": {"permissions": ["*"]},
}

ENV_PREFIX = "SWITCHBOARD"


@dataclass(slots=True)
class BootState:
    config: ConfigStore
    messages: MessageSource
    dispatcher: CommandDispatcher
    logger: logging.Logger
    loaded_count: int


def _step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _resolve_dir(config: ConfigStore, raw: str) -> Path:
    """Relative directories are taken from the config file's folder."""
    path = Path(raw).expanduser()
    if not path.is_absolute() and config.path is not None:
        path = config.path.parent / path
    return path


def boot_sequence(config_path: str | Path | None = None) -> BootState:
    """Run all boot steps and return the assembled state."""
    enable_windows_vt()

    # ---------- configuration ----------
    config = _step(
        f"Load configuration ({config_path or 'defaults'})",
        lambda: ConfigStore(config_path, data=DEFAULTS, env_prefix=ENV_PREFIX),
    )

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "switchboard",
            level=config.load_str("switchboard.log_level", "INFO").upper(),
            logfile=config.load_str("switchboard.log_file") or None,
        ),
    )

    # ---------- messages ----------
    messages_dir = _resolve_dir(config, config.load_str("switchboard.messages", "messages"))
    messages = _step(
        f"Load message catalogs from '{messages_dir}'",
        lambda: MessageSource(
            messages_dir,
            default_locale=config.load_str("switchboard.locale", "en"),
        ),
    )

    # ---------- root command ----------
    dispatcher = _step(
        "Create root command",
        lambda: CommandDispatcher(
            config.load_str("switchboard.command", "sb"),
            config=config,
            messages=messages,
            multi_page_help=config.load_bool("switchboard.multi_page_help", True),
        ),
    )

    pkg_name = config.load_str("switchboard.plugins", "plugins")
    _step(f"Locate plugins package '{pkg_name}'", lambda: __import__(pkg_name))
    loaded_count = _step("Load sub-command definitions",
                         lambda: load_subcommands(dispatcher, pkg_name))

    if not messages.locales():
        logger.warning("No message catalogs found in '%s'; using built-in texts", messages_dir)

    _step(f"Boot complete (/{dispatcher.name}, {loaded_count} sub-commands)", lambda: None)

    return BootState(
        config=config,
        messages=messages,
        dispatcher=dispatcher,
        logger=logger,
        loaded_count=loaded_count,
    )
