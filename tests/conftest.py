"""
Shared fixtures: fake senders and actors, in-memory configuration and catalogs.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from typing import Any

import pytest

from switchboard.commands import CommandDispatcher, SubCommand, subcommand
from switchboard.config import ConfigStore, MessageSource
from switchboard.ui import RichText


@dataclass
class FakeActor:
    """A physical actor holding `item` (None means empty hand)."""

    item: Any = None
    locale: str | None = None

    def held_item(self) -> Any:
        return self.item


@dataclass
class FakeSender:
    """Records every message it receives as a RichText document."""

    name: str = "tester"
    permissions: set[str] = field(default_factory=lambda: {"*"})
    actor: FakeActor | None = None
    locale: str | None = None
    messages: list[RichText] = field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        return any(fnmatch.fnmatchcase(permission, p) for p in self.permissions)

    def as_physical_actor(self) -> FakeActor | None:
        return self.actor

    def send_message(self, message: RichText) -> None:
        self.messages.append(message)

    @property
    def texts(self) -> list[str]:
        return [m.plain() for m in self.messages]

    @property
    def last(self) -> RichText:
        return self.messages[-1]


@pytest.fixture
def config() -> ConfigStore:
    return ConfigStore(data={})


@pytest.fixture
def messages() -> MessageSource:
    return MessageSource(catalogs={"en": {}})


@pytest.fixture
def dispatcher(config, messages) -> CommandDispatcher:
    return CommandDispatcher("sb", config=config, messages=messages, multi_page_help=True)


@pytest.fixture
def single_page(config, messages) -> CommandDispatcher:
    return CommandDispatcher("sb", config=config, messages=messages, multi_page_help=False)


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def player() -> FakeSender:
    return FakeSender(name="steve", actor=FakeActor(item="diamond_sword"))


def make_sub(name: str, calls: list | None = None, **kwargs) -> SubCommand:
    """A sub-command recording (name, args) into `calls` when executed."""

    def _run(command, sender, label, args):
        if calls is not None:
            calls.append((command.name, list(args)))

    return subcommand(name=name, description=f"{name} description", **kwargs)(_run)
