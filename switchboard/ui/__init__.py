#!/usr/bin/env python3
# switchboard/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import (
    ANSI,
    LEGACY_CODES,
    strip_ansi,
    strip_markup,
    enable_windows_vt,
    colorize,
    render_markup,
    translate_legacy,
    hyperlink,
)
from .rich_text import ClickAction, TextRun, RichText
from .console import PRINT_MUTEX, print_line, print_markup, print_rich
from .logging import init_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "LEGACY_CODES",
    "strip_ansi",
    "strip_markup",
    "enable_windows_vt",
    "colorize",
    "render_markup",
    "translate_legacy",
    "hyperlink",
    "ClickAction",
    "TextRun",
    "RichText",
    "PRINT_MUTEX",
    "print_line",
    "print_markup",
    "print_rich",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
