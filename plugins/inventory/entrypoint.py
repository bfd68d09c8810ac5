# plugins/inventory/entrypoint.py
from __future__ import annotations

from switchboard.commands import SubCommand, subcommand


@subcommand(player_only=True, requires_item=True,
            description="Describe the item in your hand.")
def inspect(command: SubCommand, sender, label: str, args: list[str]) -> None:
    item = sender.as_physical_actor().held_item()
    command.reply(sender, "output", "[bright_cyan]You hold:[/] %item%", {"item": item})


@subcommand(player_only=True, description="Show where you stand.")
def whereami(command: SubCommand, sender, label: str, args: list[str]) -> None:
    actor = sender.as_physical_actor()
    command.reply(sender, "output", "[bright_cyan]Locale:[/] %locale%",
                  {"locale": getattr(actor, "locale", None) or "-"})


# Set to False to skip this group at discovery.
ENABLED = True

SUBCOMMANDS = [inspect, whereami]
