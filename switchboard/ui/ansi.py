#!/usr/bin/env python3
# switchboard/ui/ansi.py
from __future__ import annotations

import ctypes
import os
import re
from typing import Optional

# ---- Core SGR maps ----------------------------------------------------------

ANSI = {
    "reset": "\x1b[0m",

    # styles
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "italic": "\x1b[3m",
    "underline": "\x1b[4m",
    "blink": "\x1b[5m",
    "strike": "\x1b[9m",

    # fg 8-color
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",

    # fg bright 8-color
    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_magenta": "\x1b[95m",
    "bright_cyan": "\x1b[96m",
    "bright_white": "\x1b[97m",
}

# Legacy '&x' colour/format codes used by older message catalogs.
# A colour code also clears any active formatting, hence the leading [/].
LEGACY_CODES = {
    "0": "[/][black]",
    "1": "[/][blue]",
    "2": "[/][green]",
    "3": "[/][cyan]",
    "4": "[/][red]",
    "5": "[/][magenta]",
    "6": "[/][yellow]",
    "7": "[/][white]",
    "8": "[/][bright_black]",
    "9": "[/][bright_blue]",
    "a": "[/][bright_green]",
    "b": "[/][bright_cyan]",
    "c": "[/][bright_red]",
    "d": "[/][bright_magenta]",
    "e": "[/][bright_yellow]",
    "f": "[/][bright_white]",
    "k": "[blink]",
    "l": "[bold]",
    "m": "[strike]",
    "n": "[underline]",
    "o": "[italic]",
    "r": "[/]",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|\x1b\]8;;.*?\x1b\\")
_LEGACY_RE = re.compile(r"&([0-9a-fk-or])", re.IGNORECASE)
# Markup tags: [red], [bold], [#RRGGBB], [rgb(r,g,b)], closers [/red] and [/]
_TAG_RE = re.compile(
    r"\[/\]|\[(/?)([a-zA-Z_][\w-]*|#[0-9A-Fa-f]{6}|rgb\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*\))\]")

_vt_enabled_cache: Optional[bool] = None


# ---- Utilities --------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences (SGR and OSC 8 hyperlinks) from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Enable ANSI (VT) processing on Windows consoles when possible.
    On non-Windows systems, always returns True.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt" or os.environ.get("WT_SESSION") or os.environ.get("ANSICON"):
        _vt_enabled_cache = True
        return True

    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        handle = kernel32.GetStdHandle(-11)
        mode = ctypes.c_uint()
        if kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            _vt_enabled_cache = bool(
                kernel32.SetConsoleMode(handle, mode.value | 0x0004))
        else:
            _vt_enabled_cache = False
    except Exception:
        _vt_enabled_cache = False
    return _vt_enabled_cache


def rgb(r: int, g: int, b: int) -> str:
    """Return a true-color foreground SGR sequence for (r,g,b)."""
    r, g, b = (max(0, min(255, v)) for v in (r, g, b))
    return f"\x1b[38;2;{r};{g};{b}m"


def hex_color(hex_code: str) -> str:
    """Return a true-color SGR from '#RRGGBB'."""
    if not re.fullmatch(r"#[0-9A-Fa-f]{6}", hex_code):
        raise ValueError("hex_code must be like '#RRGGBB'.")
    return rgb(int(hex_code[1:3], 16), int(hex_code[3:5], 16), int(hex_code[5:7], 16))


def hyperlink(text: str, url: str) -> str:
    """OSC 8 hyperlink; terminals without support show the bare text."""
    return f"\x1b]8;;{url}\x1b\\{text}\x1b]8;;\x1b\\"


def colorize(text: str, *styles: str) -> str:
    """Wrap text with one or more SGR styles from ANSI; always auto-resets."""
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def translate_legacy(text: str) -> str:
    """Translate '&c'-style codes into markup tags ('&&' is not an escape)."""
    return _LEGACY_RE.sub(lambda m: LEGACY_CODES[m.group(1).lower()], text)


# ---- Markup renderer --------------------------------------------------------

def _open_sequence(tag: str) -> str | None:
    if tag in ANSI and tag != "reset":
        return ANSI[tag]
    if tag.startswith("#"):
        return hex_color(tag)
    if tag.lower().startswith("rgb("):
        r, g, b = (int(n) for n in re.findall(r"\d+", tag))
        return rgb(r, g, b)
    return None


def render_markup(
    text: str,
    *,
    stack: list[tuple[str, str]] | None = None,
    trailing_reset: bool = True,
) -> str:
    """
    Render bracket markup to ANSI.

    Rules:
    - Tags nest on a simple stack; [/] clears the whole stack.
    - A closer pops up to its opener, then re-emits the remaining styles.
    - Unknown tags and unmatched closers are passed through literally.

    Passing `stack` lets consecutive calls share open styles; it is mutated
    in place.
    """
    out: list[str] = []
    if stack is None:
        stack = []  # (key, sequence)

    i = 0
    for m in _TAG_RE.finditer(text):
        start, end = m.span()
        out.append(text[i:start])
        i = end

        if m.group(0) == "[/]":
            stack.clear()
            out.append(ANSI["reset"])
            continue

        is_close, tag = bool(m.group(1)), m.group(2)
        key = tag.lower() if tag.lower().startswith("rgb(") else tag
        if not is_close:
            seq = _open_sequence(tag)
            if seq is None:
                out.append(m.group(0))
                continue
            stack.append((key, seq))
            out.append(seq)
            continue

        if not any(k == key for k, _ in stack):
            out.append(m.group(0))
            continue
        while stack:
            popped, _ = stack.pop()
            if popped == key:
                break
        out.append(ANSI["reset"])
        out.append("".join(seq for _, seq in stack))

    out.append(text[i:])
    if stack and trailing_reset:
        out.append(ANSI["reset"])
    return "".join(out)


def strip_markup(text: str) -> str:
    """Return the visible text of a markup string."""
    return strip_ansi(render_markup(text))
