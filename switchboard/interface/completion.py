#!/usr/bin/env python3
# switchboard/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Bridges a raw line-editor buffer to `CommandDispatcher.tab_complete`:
- The buffer is split shell-style; trailing whitespace starts a new, empty token.
- A leading '/<command>' (or bare '<command>') token is dropped, so the console
  accepts both 'give ...' and '/sb give ...'.
- The first token also offers the console's own verbs.
"""

import shlex
from typing import TYPE_CHECKING

from switchboard.commands import Sender, filter_completions

if TYPE_CHECKING:
    from switchboard.commands import CommandDispatcher

# Console verbs always available
BUILT_IN_COMMANDS: tuple[str, ...] = ("exit", "quit")


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into tokens using POSIX rules; bad quoting falls back to whitespace."""
    try:
        return shlex.split(command_line, posix=True)
    except ValueError:
        return command_line.split()


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    If trailing whitespace exists, an empty token is appended to signal a new one.
    """
    if not raw_input:
        return [""], ""

    parts = tokenize(raw_input)
    if not parts or raw_input[-1].isspace():
        parts.append("")
    return parts, parts[-1]


def strip_root(dispatcher: "CommandDispatcher", tokens: list[str]) -> list[str]:
    """Drop a leading '/<command>' or '<command>' token."""
    if tokens and tokens[0].lstrip("/").lower() == dispatcher.name:
        return tokens[1:]
    return tokens


def suggest(dispatcher: "CommandDispatcher", sender: Sender, text_before_cursor: str) -> list[str]:
    """Produce suggestions for the token under the cursor."""
    parts, current_prefix = _split_current_token(text_before_cursor.lstrip())
    had_root = len(parts) > 1 and parts[0].lstrip("/").lower() == dispatcher.name
    args = strip_root(dispatcher, parts) if had_root else parts

    suggestions = dispatcher.tab_complete(sender, dispatcher.name, args)
    if len(parts) == 1:
        suggestions = filter_completions(current_prefix, BUILT_IN_COMMANDS) + suggestions
    return suggestions
