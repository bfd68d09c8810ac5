#!/usr/bin/env python3
# switchboard/commands/help.py
from __future__ import annotations

"""
Built-in paginated help.

`<command> help [page|sub-command]` lists the sub-commands the sender may
use, `commands_per_page` at a time (never fewer than 4), with clickable
previous/next controls spliced into the header and footer templates.
A non-numeric second argument naming a sub-command shows that entry alone.
"""

import re
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from switchboard.commands.command_types import (
    Sender,
    SubCommandLike,
    append_help_entry,
    filter_completions,
)
from switchboard.commands.navigation import render_navigation
from switchboard.ui import ClickAction, RichText

if TYPE_CHECKING:
    from switchboard.commands.dispatcher import CommandDispatcher

MIN_COMMANDS_PER_PAGE = 4

_PAGE_RE = re.compile(r"[+-]?\d+")


def page_count(elements: int, per_page: int) -> int:
    """Pages needed for `elements` entries; zero entries means zero pages."""
    return elements // per_page + (0 if elements % per_page == 0 else 1)


def clamp_page(page: int, max_page: int) -> int:
    return max(1, min(max_page, page))


def parse_page(token: str) -> int | None:
    """Strict integer parse ('+2', '-1', '10'); anything else is None."""
    return int(token) if _PAGE_RE.fullmatch(token) else None


@dataclass(slots=True)
class _PageControls:
    """Previous/next controls bound to one sender and alias."""
    owner: "HelpSubCommand"
    sender: Sender
    alias: str

    def _control(self, kind: str, default: str, page: int, target: int,
                 max_page: int, active: bool, document: RichText) -> None:
        if not active:
            document.append(self.owner.language_string(
                f"{kind}_void", default, self.sender,
                {"page": page, "max_page": max_page}))
            return
        document.append(
            self.owner.language_string(
                f"{kind}_text", default, self.sender,
                {"target": target, "page": page}),
            click=ClickAction.run(f"/{self.alias} {self.owner.name} {target}"),
            hover=self.owner.language_string(
                f"{kind}_hover", "Go to page %target%", self.sender,
                {"target": target, "page": page, "max_page": max_page}),
        )

    def append_next(self, document: RichText, page: int, max_page: int) -> None:
        self._control("next", ">>>>", page, page + 1, max_page,
                      page < max_page, document)

    def append_previous(self, document: RichText, page: int, max_page: int) -> None:
        self._control("prev", "<<<<", page, page - 1, max_page,
                      page > 1, document)


class HelpSubCommand:
    """Pseudo sub-command owned by a dispatcher; never registered externally."""

    NAME = "help"

    def __init__(self, dispatcher: "CommandDispatcher") -> None:
        self.name = self.NAME
        self.player_only = False
        self.requires_item = False
        self.permission = ""
        self.per_page = MIN_COMMANDS_PER_PAGE
        self.bind(dispatcher)

    def bind(self, dispatcher: "CommandDispatcher") -> None:
        self._dispatcher = weakref.ref(dispatcher)
        self.permission = f"{dispatcher.name}.{self.name}"
        self.reload()

    @property
    def dispatcher(self) -> "CommandDispatcher":
        owner = self._dispatcher()
        if owner is None:
            raise RuntimeError("Help sub-command outlived its dispatcher")
        return owner

    def reload(self) -> None:
        configured = self.dispatcher.config.load_int(
            f"{self.dispatcher.name}.{self.name}.commands_per_page", 0)
        self.per_page = max(MIN_COMMANDS_PER_PAGE, configured)

    def language_string(self, path: str, default: str, sender: Sender | None,
                        placeholders: Mapping[str, Any] | None = None) -> str:
        return self.dispatcher.messages.resolve(
            f"{self.dispatcher.name}.{self.name}.{path}", default, sender, True, placeholders)

    def max_page_for(self, elements: int) -> int:
        return page_count(elements, self.per_page)

    # ---------------- Capability set ----------------

    def description(self, sender: Sender) -> str:
        return self.language_string("description", "Show the help pages", sender)

    def params(self, sender: Sender) -> str:
        return self.language_string("params", "[page|command]", sender)

    def append_help(self, document: RichText, sender: Sender, alias: str) -> RichText:
        return append_help_entry(document, alias, self.name,
                                 self.params(sender), self.description(sender))

    def execute(self, sender: Sender, label: str, args: Sequence[str]) -> None:
        page = 1
        if len(args) > 1:
            parsed = parse_page(args[1])
            if parsed is not None:
                page = parsed
            else:
                sub = self.dispatcher.get_subcommand(args[1], sender)
                if sub is not None:
                    self.show_subcommand(sender, label, sub)
                    return
        self.render_page(sender, label, page)

    def complete(self, sender: Sender, args: Sequence[str]) -> list[str]:
        if len(args) != 2:
            return []
        allowed = self.dispatcher.get_allowed_subcommands(sender)
        pages = [str(i) for i in range(1, self.max_page_for(len(allowed)) + 1)]
        return filter_completions(args[1], pages + [sub.name for sub in allowed])

    # ---------------- Rendering ----------------

    def show_subcommand(self, sender: Sender, alias: str, sub: SubCommandLike) -> None:
        """Single-entry help: header, usage line, description."""
        document = RichText(self.language_string(
            "header-sub", f"[cyan][bold]{self.dispatcher.name} %sub% - Help", sender,
            {"sub": sub.name}))
        document.newline()
        params = sub.params(sender)
        document.append(f"[/][green]/{alias} [bright_green]{sub.name} {params}".rstrip())
        document.newline()
        document.append(sub.description(sender), reset=True)
        sender.send_message(document)

    def render_page(self, sender: Sender, alias: str, page: int) -> None:
        allowed = self.dispatcher.get_allowed_subcommands(sender)
        if not allowed:
            self.dispatcher.send_permission_lack_generic(sender)
            return

        max_page = self.max_page_for(len(allowed))
        page = clamp_page(page, max_page)
        controls = _PageControls(self, sender, alias)
        default_title = f"[cyan][bold]{self.dispatcher.name} - Help"

        document = RichText()
        render_navigation(document, self.language_string("header", default_title, sender),
                          page, max_page, controls)
        document.newline()
        start = self.per_page * (page - 1)
        for sub in allowed[start:min(len(allowed), self.per_page * page)]:
            sub.append_help(document, sender, alias)
            document.newline()
        render_navigation(document, self.language_string("footer", default_title, sender),
                          page, max_page, controls)
        sender.send_message(document)
