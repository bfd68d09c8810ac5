#!/usr/bin/env python3
# switchboard/commands/dispatcher.py
from __future__ import annotations

"""
Root command: sub-command registry, routing and validation.

This module provides:
- CommandDispatcher: owns the ordered sub-command list and the optional
  built-in help, routes invocations, renders help and answers completion.

Lookup returns the first registered sub-command whose name matches
(case-insensitive), then the built-in help. Registering two sub-commands
with the same name is allowed: the second keeps its help slot but can never
be selected.
"""

import logging
from typing import Any, Callable, Mapping, Sequence

from switchboard.commands.command_types import (
    Sender,
    SubCommand,
    SubCommandCallback,
    SubCommandLike,
    CompletionProvider,
    filter_completions,
    is_empty_item,
    subcommand,
)
from switchboard.commands.help import HelpSubCommand
from switchboard.config import ConfigStore, MessageSource
from switchboard.ui import RichText

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """A root command exposing permission-gated sub-commands."""

    def __init__(
        self,
        name: str,
        *,
        config: ConfigStore,
        messages: MessageSource,
        multi_page_help: bool = False,
    ) -> None:
        self.name = name.lower()
        self.config = config
        self.messages = messages
        self._subcommands: list[SubCommandLike] = []
        self._help: HelpSubCommand | None = HelpSubCommand(self) if multi_page_help else None

    def __repr__(self) -> str:
        return f"CommandDispatcher({self.name!r}, {len(self._subcommands)} sub-commands)"

    @property
    def subcommands(self) -> tuple[SubCommandLike, ...]:
        return tuple(self._subcommands)

    @property
    def help_subcommand(self) -> HelpSubCommand | None:
        return self._help

    # ---------------- Registration ----------------

    def register_subcommand(self, sub: SubCommandLike) -> None:
        """Append a sub-command; names are not checked for uniqueness."""
        sub.bind(self)
        self._subcommands.append(sub)
        logger.debug("Registered sub-command: %s %s", self.name, sub.name)

    def register_subcommand_factory(
        self,
        factory: Callable[[], SubCommandLike | None],
        condition: bool = True,
    ) -> bool:
        """
        Build and register a sub-command from a factory.

        Returns False without calling the factory when `condition` is false,
        and False when the factory raises (logged) or returns None.
        """
        if not condition:
            return False
        try:
            sub = factory()
            if sub is None:
                return False
            self.register_subcommand(sub)
        except Exception:
            logger.exception("Failed to register a sub-command for '%s' from %r",
                             self.name, factory)
            return False
        return True

    def subcommand(
        self,
        *,
        name: str | None = None,
        permission: str = "",
        player_only: bool = False,
        requires_item: bool = False,
        description: str | None = None,
        params: str = "",
        completer: CompletionProvider | None = None,
        on_reload: Callable[[SubCommand], None] | None = None,
    ) -> Callable[[SubCommandCallback], SubCommandCallback]:
        """Decorator registering a function as a sub-command of this dispatcher."""

        def wrapper(func: SubCommandCallback) -> SubCommandCallback:
            self.register_subcommand(subcommand(
                name=name,
                permission=permission,
                player_only=player_only,
                requires_item=requires_item,
                description=description,
                params=params,
                completer=completer,
                on_reload=on_reload,
            )(func))
            return func

        return wrapper

    # ---------------- Lookup ----------------

    def get_allowed_subcommands(self, sender: Sender) -> list[SubCommandLike]:
        """Sub-commands the sender may use, in registration order, help last."""
        allowed = [sub for sub in self._subcommands if sender.has_permission(sub.permission)]
        if self._help is not None and self._subcommands:
            allowed.append(self._help)
        return allowed

    def get_subcommand(self, token: str, sender: Sender) -> SubCommandLike | None:
        """First registered match by name, then the built-in help."""
        key = token.lower()
        for sub in self._subcommands:
            if sub.name == key:
                return sub
        if (self._help is not None and self._help.name == key
                and self.get_allowed_subcommands(sender)):
            return self._help
        return None

    # ---------------- Dispatch ----------------

    def dispatch(self, sender: Sender, label: str, args: Sequence[str]) -> bool:
        """Route an invocation; always reports it as handled."""
        args = list(args)
        sub = self.get_subcommand(args[0], sender) if args else None
        if self._validate_requires(sub, sender, label):
            logger.debug("Dispatching '%s %s' for %s", label, sub.name,
                         getattr(sender, "name", sender))
            sub.execute(sender, label, args)
        return True

    def _validate_requires(self, sub: SubCommandLike | None, sender: Sender, label: str) -> bool:
        if sub is None:
            self.help(sender, label)
            return False
        if sub is not self._help and not sender.has_permission(sub.permission):
            self.send_permission_lack(sub.permission, sender)
            return False
        if sub.player_only:
            actor = sender.as_physical_actor()
            if actor is None:
                self.send_player_only(sender)
                return False
            if sub.requires_item and is_empty_item(actor.held_item()):
                self.send_no_item_in_hand(sender)
                return False
        return True

    def help(self, sender: Sender, label: str) -> None:
        """Help shown when no sub-command was selected."""
        if self._help is not None:
            self._help.render_page(sender, label, 1)
            return

        document = RichText(self.language_string(
            "help-header", f"[cyan][bold]{self.name} - Help", sender))
        document.newline()
        shown = False
        for sub in self._subcommands:
            if not sender.has_permission(sub.permission):
                continue
            if shown:
                document.newline()
            shown = True
            sub.append_help(document, sender, label)
        if shown:
            sender.send_message(document)
        else:
            self.send_permission_lack_generic(sender)

    # ---------------- Completion ----------------

    def tab_complete(self, sender: Sender, label: str, args: Sequence[str]) -> list[str]:
        """Suggestions for the last token of `args`; never raises."""
        try:
            return self._tab_complete(sender, list(args))
        except Exception:
            logger.warning("Completion failed for '%s %s'", label, " ".join(args),
                           exc_info=True)
            return []

    def _tab_complete(self, sender: Sender, args: list[str]) -> list[str]:
        if len(args) == 1:
            names = [sub.name for sub in self.get_allowed_subcommands(sender)]
            return filter_completions(args[0], names)
        if len(args) > 1:
            sub = self.get_subcommand(args[0], sender)
            if sub is None:
                return []
            if not sender.has_permission(sub.permission):
                return []
            return list(sub.complete(sender, args))
        return []

    # ---------------- Reload ----------------

    def reload(self) -> None:
        """Reload configuration first, then sub-commands, then help."""
        self.config.reload()
        for sub in self._subcommands:
            sub.reload()
        if self._help is not None:
            self._help.reload()
        logger.info("Reloaded '%s' (%d sub-commands)", self.name, len(self._subcommands))

    # ---------------- Messages & config ----------------

    def _send(self, sender: Sender, key: str, default: str,
              placeholders: Mapping[str, Any] | None = None) -> None:
        sender.send_message(RichText(
            self.messages.resolve(key, default, sender, True, placeholders)))

    def send_permission_lack(self, permission: str, sender: Sender) -> None:
        self._send(sender, "lack-permission",
                   "[bright_red]You lack of permission %permission%",
                   {"permission": permission})

    def send_permission_lack_generic(self, sender: Sender) -> None:
        self._send(sender, "lack-permission-generic",
                   "[bright_red]You don't have permission to use this command")

    def send_player_only(self, sender: Sender) -> None:
        self._send(sender, "player-only", "[bright_red]Command for Players only")

    def send_no_item_in_hand(self, sender: Sender) -> None:
        self._send(sender, "no-item-on-hand", "[bright_red]You need to hold an item in hand")

    def language_string(self, path: str, default: str, sender: Sender | None,
                        placeholders: Mapping[str, Any] | None = None) -> str:
        return self.messages.resolve(f"{self.name}.{path}", default, sender, True, placeholders)

    def language_list(self, path: str, default: list[str], sender: Sender | None,
                      placeholders: Mapping[str, Any] | None = None) -> list[str]:
        return self.messages.resolve_list(f"{self.name}.{path}", default, sender, True, placeholders)

    def conf_str(self, path: str) -> str:
        return self.config.load_str(f"{self.name}.{path}", "")

    def conf_int(self, path: str) -> int:
        return self.config.load_int(f"{self.name}.{path}", 0)

    def conf_bool(self, path: str) -> bool:
        return self.config.load_bool(f"{self.name}.{path}", True)
