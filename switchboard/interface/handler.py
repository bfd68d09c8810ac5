#!/usr/bin/env python3
# switchboard/interface/handler.py
from __future__ import annotations

"""
Console line handling.

A typed line is routed to the root command as if it had been sent by
`ConsoleSender`. Both 'give 3' and '/sb give 3' reach the same sub-command.

Console verbs handled here:
  exit, quit   - stop the loop
  clear, cls   - clear the screen
"""

import fnmatch
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from switchboard.interface.completion import strip_root, tokenize
from switchboard.ui import RichText, colorize, print_line, print_rich

if TYPE_CHECKING:
    from switchboard.commands import CommandDispatcher, PhysicalActor
    from switchboard.interface.cli import BaseCLI

logger = logging.getLogger(__name__)

# Short hint shown at startup
HELP_TEXT = "Type 'help' to list sub-commands, 'exit' to leave."


@dataclass(slots=True)
class ConsoleSender:
    """
    The operator at the terminal.

    Permissions are glob patterns: '*' grants everything, 'sb.*' grants a subtree.
    The console has no physical presence, so player-only sub-commands refuse it.
    """

    name: str = "console"
    permissions: tuple[str, ...] = ("*",)
    locale: str | None = None
    stream: TextIO | None = None
    color: bool = True
    history: list[str] = field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        if not permission:
            return True
        node = permission.lower()
        return any(fnmatch.fnmatchcase(node, pattern.lower()) for pattern in self.permissions)

    def as_physical_actor(self) -> "PhysicalActor | None":
        return None

    def send_message(self, document: RichText) -> None:
        self.history.append(document.plain())
        print_rich(document, file=self.stream or sys.stdout, color=self.color)


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def handle_line(dispatcher: "CommandDispatcher", sender: ConsoleSender, input_line: str) -> bool:
    """
    Run one console line. Returns False when the loop should stop.

    Errors raised by a sub-command propagate to the caller.
    """
    line = input_line.strip()
    if not line:
        return True

    lowered = line.lower()
    if lowered in {"exit", "quit"}:
        return False
    if lowered in {"clear", "cls"}:
        clear_screen()
        return True

    args = strip_root(dispatcher, tokenize(line))
    logger.debug("console -> /%s %s", dispatcher.name, " ".join(args))
    dispatcher.dispatch(sender, dispatcher.name, args)
    return True


def run_console(dispatcher: "CommandDispatcher", sender: ConsoleSender, cli: "BaseCLI") -> None:
    """Read-eval loop until exit, EOF or Ctrl-C."""
    print_line(colorize(HELP_TEXT, "bright_black"))
    with cli:
        while True:
            try:
                line = cli.get_line()
            except (EOFError, KeyboardInterrupt):
                print_line()
                break
            try:
                if not handle_line(dispatcher, sender, line):
                    break
            except Exception as exc:
                logger.debug("Sub-command failed", exc_info=True)
                print_line(colorize(f"[error] {type(exc).__name__}: {exc}", "red"))
