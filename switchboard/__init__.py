#!/usr/bin/env python3
# switchboard/__init__.py
from __future__ import annotations
"""
Switchboard package bootstrap.

A root command with permission-gated sub-commands, paginated clickable help
and context-aware completion.

Notes:
- Let 'switchboard.commands', 'switchboard.config' and 'switchboard.interface'
  expose their APIs via their own __init__.py files.
- Keep the convenience re-exports below minimal; no interface wiring here.
"""

from switchboard.commands import CommandDispatcher, SubCommand, subcommand  # noqa: F401

__version__ = "0.3.0"
