#!/usr/bin/env python3
# switchboard/ui/console.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

from .ansi import enable_windows_vt, render_markup, strip_ansi
from .rich_text import RichText

# Single shared print mutex for all UI output (logging included).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Thread-safe single-line print (stdout unless `file` is given)."""
    stream = file or sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()


def print_markup(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Like print_line, but renders bracket markup to ANSI."""
    enable_windows_vt()
    print_line(render_markup(text), file=file, flush=flush)


def print_rich(document: RichText, *, file: TextIO | None = None, color: bool = True) -> None:
    """Print a RichText document; plain text when color is off or the stream is not a TTY."""
    stream = file or sys.stdout
    if color and getattr(stream, "isatty", lambda: False)():
        enable_windows_vt()
        print_line(document.to_ansi(), file=stream)
    else:
        print_line(strip_ansi(document.plain()), file=stream)
