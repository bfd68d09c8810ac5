#!/usr/bin/env python3
# switchboard/commands/__init__.py
from __future__ import annotations

"""
Package for sub-command routing and help.

Provides:
- Protocols and data structures (`Sender`, `PhysicalActor`, `SubCommandLike`, `SubCommand`).
- The root command (`CommandDispatcher`) and the `subcommand` decorator.
- Built-in paginated help (`HelpSubCommand`) and its navigation-marker parser.

This package re-exports public APIs from:
- command_types.py
- dispatcher.py
- help.py
- navigation.py
"""


# Re-export from submodules (command_types first: the others import it)
from .command_types import (
    Sender,
    PhysicalActor,
    SubCommandLike,
    SubCommand,
    SubCommandCallback,
    CompletionProvider,
    filter_completions,
    is_empty_item,
    subcommand,
)
from .navigation import NavigationSplit, split_navigation, render_navigation
from .help import HelpSubCommand, page_count, clamp_page, parse_page
from .dispatcher import CommandDispatcher

__all__ = [
    "Sender",
    "PhysicalActor",
    "SubCommandLike",
    "SubCommand",
    "SubCommandCallback",
    "CompletionProvider",
    "filter_completions",
    "is_empty_item",
    "subcommand",
    "NavigationSplit",
    "split_navigation",
    "render_navigation",
    "HelpSubCommand",
    "page_count",
    "clamp_page",
    "parse_page",
    "CommandDispatcher",
]
