# plugins/system/entrypoint.py
from __future__ import annotations

import random
import re

from switchboard.commands import SubCommand, filter_completions, subcommand

_DICE_RE = re.compile(r"^(?:(\d+))?d(\d+)$", re.IGNORECASE)
_COMMON_DICE = ("d4", "d6", "d8", "d10", "d12", "d20", "d100")


# ---------- echo ----------
@subcommand(params="<text...>", description="Repeat the given text.")
def echo(command: SubCommand, sender, label: str, args: list[str]) -> None:
    if len(args) < 2:
        command.reply(sender, "usage", "[yellow]Usage: /%label% echo <text...>",
                      {"label": label})
        return
    command.reply(sender, "output", "%text%", {"text": " ".join(args[1:])})


# ---------- whoami ----------
@subcommand(description="Show who you are to this command.")
def whoami(command: SubCommand, sender, label: str, args: list[str]) -> None:
    allowed = [sub.name for sub in command.dispatcher.get_allowed_subcommands(sender)]
    actor = sender.as_physical_actor()
    command.reply(
        sender, "output",
        "[cyan]%name%[/] (%kind%) can use: %allowed%",
        {
            "name": getattr(sender, "name", "?"),
            "kind": "console" if actor is None else "player",
            "allowed": ", ".join(allowed) or "-",
        },
    )


# ---------- roll ----------
def _roll_limits(command: SubCommand) -> tuple[int, int]:
    """(max dice, max sides) from this command's own config."""
    return max(1, command.conf_int("max_dice", 10)), max(2, command.conf_int("max_sides", 100))


def _complete_roll(command: SubCommand, sender, args: list[str]) -> list[str]:
    if len(args) != 2:
        return []
    _, max_sides = _roll_limits(command)
    return filter_completions(args[1], [d for d in _COMMON_DICE if int(d[1:]) <= max_sides])


@subcommand(params="[NdS]", description="Roll dice, e.g. 2d6.",
            completer=_complete_roll)
def roll(command: SubCommand, sender, label: str, args: list[str]) -> None:
    expr = args[1] if len(args) > 1 else "d6"
    match = _DICE_RE.match(expr)
    if match is None:
        command.reply(sender, "invalid", "[bright_red]Not a dice expression: %dice%",
                      {"dice": expr})
        return
    count = int(match.group(1) or 1)
    sides = int(match.group(2))
    max_dice, max_sides = _roll_limits(command)
    if not (1 <= count <= max_dice and 2 <= sides <= max_sides):
        command.reply(sender, "limits", "[bright_red]Use 1-%dice% dice with 2-%sides% sides",
                      {"dice": max_dice, "sides": max_sides})
        return
    results = [random.randint(1, sides) for _ in range(count)]
    command.reply(sender, "output", "[green]%dice%[/] -> %rolls% = [bold]%total%",
                  {"dice": expr, "rolls": " ".join(map(str, results)), "total": sum(results)})


# ---------- reload ----------
@subcommand(description="Reload configuration and messages.")
def reload(command: SubCommand, sender, label: str, args: list[str]) -> None:
    dispatcher = command.dispatcher
    dispatcher.reload()
    dispatcher.messages.reload()
    command.reply(sender, "done", "[green]Reloaded %count% sub-commands",
                  {"count": len(dispatcher.subcommands)})


SUBCOMMANDS = [echo, whoami, roll, reload]
