#!/usr/bin/env python3
# switchboard/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (live completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (last resort)
"""

from pathlib import Path
from typing import Callable, Optional

from switchboard.interface.completion import _split_current_token

# History location in the user home directory
HISTORY_FILE_PATH = Path.home() / ".switchboard_history"

Suggester = Callable[[str], list[str]]


class BaseCLI:
    """
    Plain `input()` frontend and base interface for the others.

    Subclasses may override setup(), get_line() and teardown().
    Context manager support guarantees teardown.
    """

    def __init__(self, prompt: str = "> ") -> None:
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        pass

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class PromptToolkitCLI(BaseCLI):
    """Line editor with history and live completion."""

    def __init__(self, suggester: Suggester, prompt: str = "> ") -> None:
        super().__init__(prompt)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                _, current_prefix = _split_current_token(text_before_cursor)
                # replace exactly the current token
                for word in suggester(text_before_cursor):
                    yield Completion(word, start_position=-len(current_prefix))

        self._session = PromptSession(
            history=FileHistory(str(HISTORY_FILE_PATH)),
            completer=_Completer(),
            complete_while_typing=True,
        )

    def setup(self) -> None:
        HISTORY_FILE_PATH.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._session.prompt(self.prompt)


class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self, suggester: Suggester, prompt: str = "> ") -> None:
        super().__init__(prompt)
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._suggester = suggester

    def setup(self) -> None:
        HISTORY_FILE_PATH.touch(exist_ok=True)
        try:
            self.readline.read_history_file(str(HISTORY_FILE_PATH))
        except OSError:
            pass
        self.readline.set_completer_delims(" \t\n")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            candidates = self._suggester(self.readline.get_line_buffer())
            matches = [w for w in candidates if w.startswith(text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        try:
            self.readline.write_history_file(str(HISTORY_FILE_PATH))
        except OSError:
            pass


def make_cli(suggester: Suggester | None, prompt: str = "> ") -> BaseCLI:
    """Select the best available frontend; no suggester means no completion."""
    if suggester is None:
        return BaseCLI(prompt)
    try:
        return PromptToolkitCLI(suggester, prompt)
    except ImportError:
        pass
    try:
        return ReadlineCLI(suggester, prompt)
    except ImportError:
        return BaseCLI(prompt)
