#!/usr/bin/env python3
# switchboard/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Orchestrated startup pipeline with Linux-style [ OK ] / [FAILED] lines.
- BootState: Dataclass containing config, messages, root command, logger and sub-command count.
"""


from .boot import BootState, boot_sequence, DEFAULTS

__all__ = ["boot_sequence", "BootState", "DEFAULTS"]
