#!/usr/bin/env python3
# switchboard/config/__init__.py
from __future__ import annotations

"""
Package for configuration and message catalogs.

Provides:
- Dotted-path configuration store with file and environment sources (`ConfigStore`).
- Locale-aware message catalogs with placeholder substitution (`MessageSource`).
"""


from .store import ConfigStore, flatten_mapping, load_file
from .messages import MessageSource, apply_placeholders

__all__ = [
    "ConfigStore",
    "flatten_mapping",
    "load_file",
    "MessageSource",
    "apply_placeholders",
]
