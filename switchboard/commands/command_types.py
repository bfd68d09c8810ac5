#!/usr/bin/env python3
# switchboard/commands/command_types.py
from __future__ import annotations

"""
Sub-command data structures and protocols.

This module defines:
- Sender / PhysicalActor: what the host must provide for an invocation.
- SubCommandLike: the capability set the dispatcher routes to.
- SubCommand: a function-backed sub-command with metadata.
- subcommand: decorator turning a function into a SubCommand.
"""

import weakref
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Protocol, Sequence

from switchboard.ui import ClickAction, RichText

if TYPE_CHECKING:
    from switchboard.commands.dispatcher import CommandDispatcher


class PhysicalActor(Protocol):
    """A sender variant that exists in the world and can hold an item."""

    locale: str | None

    def held_item(self) -> object | None:  # pragma: no cover - signature only
        ...


class Sender(Protocol):
    """The principal issuing an invocation."""

    name: str

    def has_permission(self, permission: str) -> bool:  # pragma: no cover - signature only
        ...

    def as_physical_actor(self) -> PhysicalActor | None:  # pragma: no cover - signature only
        ...

    def send_message(self, message: RichText) -> None:  # pragma: no cover - signature only
        ...


class SubCommandLike(Protocol):
    """Capability set shared by registered sub-commands and the built-in help."""

    name: str
    permission: str
    player_only: bool
    requires_item: bool

    def bind(self, dispatcher: "CommandDispatcher") -> None: ...  # pragma: no cover

    def execute(self, sender: Sender, label: str, args: Sequence[str]) -> None: ...  # pragma: no cover

    def complete(self, sender: Sender, args: Sequence[str]) -> list[str]: ...  # pragma: no cover

    def description(self, sender: Sender) -> str: ...  # pragma: no cover

    def params(self, sender: Sender) -> str: ...  # pragma: no cover

    def append_help(self, document: RichText, sender: Sender, alias: str) -> RichText: ...  # pragma: no cover

    def reload(self) -> None: ...  # pragma: no cover


class SubCommandCallback(Protocol):
    """Execution logic: receives the sub-command itself, the sender, the label and all args."""

    def __call__(self, command: "SubCommand", sender: Sender, label: str,
                 args: list[str]) -> Any:  # pragma: no cover - signature only
        ...


class CompletionProvider(Protocol):
    """Completion logic: `args` still contains the sub-command name and the partial token."""

    def __call__(self, command: "SubCommand", sender: Sender,
                 args: list[str]) -> Iterable[str]:  # pragma: no cover - signature only
        ...


def filter_completions(prefix: str, candidates: Iterable[str]) -> list[str]:
    """Candidates starting with `prefix` (case-insensitive), original order kept."""
    text = prefix.lower()
    return [c for c in candidates if c.lower().startswith(text)]


def is_empty_item(item: object | None) -> bool:
    """An item is empty when absent or falsy (e.g. a stack of zero)."""
    return item is None or not item


def append_help_entry(
    document: RichText,
    alias: str,
    name: str,
    params: str,
    description: str,
) -> RichText:
    """One help line: '/<alias> <name> <params>', suggesting the command on click."""
    line = f"[green]/{alias} [bright_green]{name}"
    if params:
        line += f" [/]{params}"
    return document.append(
        line,
        click=ClickAction.suggest(f"/{alias} {name} "),
        hover=description or None,
        reset=True,
    )


@dataclass(slots=True, eq=False)
class SubCommand:
    """
    A named unit of work under a root command.

    Important fields:
        name: Lowercase name, the first argument that selects this sub-command.
        callback: Execution logic (see SubCommandCallback).
        permission: Permission node; defaults to '<command>.<name>' on registration.
        player_only: Only physical actors may run it.
        requires_item: With player_only, the actor must hold a non-empty item.
        description_text / params_text: Defaults for the catalog keys
            '<command>.<name>.description' and '<command>.<name>.params'.
        completer: Optional completion logic for the second token onwards.
        on_reload: Called on registration and on every reload to refresh
            config-derived state.
    """

    name: str
    callback: SubCommandCallback
    permission: str = ""
    player_only: bool = False
    requires_item: bool = False
    description_text: str = ""
    params_text: str = ""
    completer: CompletionProvider | None = None
    on_reload: Callable[["SubCommand"], None] | None = None
    module: str = field(default="", repr=False)
    _dispatcher: "weakref.ReferenceType[CommandDispatcher] | None" = field(
        default=None, init=False, repr=False)
    _derived_permission: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.name = self.name.lower()
        self._derived_permission = not self.permission

    # ---------------- Ownership ----------------

    def bind(self, dispatcher: "CommandDispatcher") -> None:
        """Attach the non-owning back-reference and read config-derived state."""
        self._dispatcher = weakref.ref(dispatcher)
        if self._derived_permission:
            self.permission = f"{dispatcher.name}.{self.name}"
        self.reload()

    def copy(self) -> "SubCommand":
        """An unbound twin, so one definition can serve several dispatchers."""
        return replace(self, permission="" if self._derived_permission else self.permission)

    @property
    def dispatcher(self) -> "CommandDispatcher":
        owner = self._dispatcher() if self._dispatcher is not None else None
        if owner is None:
            raise RuntimeError(f"Sub-command '{self.name}' is not registered")
        return owner

    @property
    def path(self) -> str:
        return f"{self.dispatcher.name}.{self.name}"

    # ---------------- Messages & config ----------------

    def language_string(self, path: str, default: str, sender: Sender | None,
                        placeholders: Mapping[str, Any] | None = None) -> str:
        return self.dispatcher.messages.resolve(
            f"{self.path}.{path}", default, sender, True, placeholders)

    def language_list(self, path: str, default: list[str], sender: Sender | None,
                      placeholders: Mapping[str, Any] | None = None) -> list[str]:
        return self.dispatcher.messages.resolve_list(
            f"{self.path}.{path}", default, sender, True, placeholders)

    def conf_str(self, path: str, default: str = "") -> str:
        return self.dispatcher.config.load_str(f"{self.path}.{path}", default)

    def conf_int(self, path: str, default: int = 0) -> int:
        return self.dispatcher.config.load_int(f"{self.path}.{path}", default)

    def conf_bool(self, path: str, default: bool = True) -> bool:
        return self.dispatcher.config.load_bool(f"{self.path}.{path}", default)

    def reply(self, sender: Sender, path: str, default: str,
              placeholders: Mapping[str, Any] | None = None) -> None:
        """Send a catalog message scoped to this sub-command."""
        sender.send_message(RichText(self.language_string(path, default, sender, placeholders)))

    # ---------------- Capability set ----------------

    def description(self, sender: Sender) -> str:
        return self.language_string("description", self.description_text, sender)

    def params(self, sender: Sender) -> str:
        return self.language_string("params", self.params_text, sender)

    def append_help(self, document: RichText, sender: Sender, alias: str) -> RichText:
        return append_help_entry(document, alias, self.name,
                                 self.params(sender), self.description(sender))

    def execute(self, sender: Sender, label: str, args: Sequence[str]) -> None:
        self.callback(self, sender, label, list(args))

    def complete(self, sender: Sender, args: Sequence[str]) -> list[str]:
        if self.completer is None:
            return []
        return list(self.completer(self, sender, list(args)))

    def reload(self) -> None:
        if self.on_reload is not None:
            self.on_reload(self)


def subcommand(
    *,
    name: str | None = None,
    permission: str = "",
    player_only: bool = False,
    requires_item: bool = False,
    description: str | None = None,
    params: str = "",
    completer: CompletionProvider | None = None,
    on_reload: Callable[[SubCommand], None] | None = None,
) -> Callable[[SubCommandCallback], SubCommand]:
    """
    Decorator turning a function into a SubCommand.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - The docstring is used as description when `description` is not given.
    """

    def wrapper(func: SubCommandCallback) -> SubCommand:
        command_obj = SubCommand(
            name=name or func.__name__.replace("_", "-"),
            callback=func,
            permission=permission,
            player_only=player_only,
            requires_item=requires_item,
            description_text=(description or func.__doc__ or "").strip(),
            params_text=params,
            completer=completer,
            on_reload=on_reload,
        )
        command_obj.module = getattr(func, "__module__", "")
        return command_obj

    return wrapper
