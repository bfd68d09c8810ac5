#!/usr/bin/env python3
# switchboard/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console in front of a root command.

Provides:
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
- Token-aware completion bridged to `CommandDispatcher.tab_complete`.
- The console sender and line handling.
- Dynamic sub-command loader for the plugins package.
"""


# Completion FIRST (cli and handler depend on it)
from .completion import suggest, tokenize, strip_root, BUILT_IN_COMMANDS

# Console sender / line handling
from .handler import ConsoleSender, handle_line, run_console, HELP_TEXT

# Loader
from .loader import load_subcommands

# CLI frontends (after completion is available)
from .cli import (
    BaseCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    make_cli,
    HISTORY_FILE_PATH,
)

__all__ = [
    # completion
    "suggest",
    "tokenize",
    "strip_root",
    "BUILT_IN_COMMANDS",
    # handler
    "ConsoleSender",
    "handle_line",
    "run_console",
    "HELP_TEXT",
    # loader
    "load_subcommands",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "HISTORY_FILE_PATH",
]
