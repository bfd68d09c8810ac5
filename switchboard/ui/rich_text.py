#!/usr/bin/env python3
# switchboard/ui/rich_text.py
from __future__ import annotations

"""
Abstract rich-text documents.

A RichText is an ordered list of TextRun objects. Each run carries markup
text and may carry a click action and a hover tooltip. Styles opened by a
run carry over into later runs unless a run is marked `reset`; click and
hover data never carry over.

Hosts decide how to deliver a document: `plain()` for logs and tests,
`to_ansi()` for terminals (click actions become OSC 8 hyperlinks).
"""

from dataclasses import dataclass
from typing import Iterator
from urllib.parse import quote

from .ansi import ANSI, hyperlink, render_markup, strip_markup


@dataclass(frozen=True, slots=True)
class ClickAction:
    """
    What happens when a run is activated.

    kind:
        "run"     - execute `value` as a command line.
        "suggest" - place `value` in the sender's input buffer.
    """
    kind: str
    value: str

    @classmethod
    def run(cls, command_line: str) -> "ClickAction":
        return cls("run", command_line)

    @classmethod
    def suggest(cls, command_line: str) -> "ClickAction":
        return cls("suggest", command_line)

    def as_url(self) -> str:
        return f"{self.kind}:{quote(self.value)}"


@dataclass(frozen=True, slots=True)
class TextRun:
    text: str
    click: ClickAction | None = None
    hover: str | None = None
    reset: bool = False


class RichText:
    """Builder and container for styled, optionally clickable text runs."""

    def __init__(self, text: str = "") -> None:
        self._runs: list[TextRun] = []
        if text:
            self.append(text)

    def append(
        self,
        text: str,
        *,
        click: ClickAction | None = None,
        hover: str | None = None,
        reset: bool = False,
    ) -> "RichText":
        """Append a run; returns self for chaining."""
        self._runs.append(TextRun(text, click, hover, reset))
        return self

    def newline(self) -> "RichText":
        return self.append("\n")

    def extend(self, other: "RichText") -> "RichText":
        self._runs.extend(other.runs)
        return self

    @property
    def runs(self) -> tuple[TextRun, ...]:
        return tuple(self._runs)

    def clickable_runs(self) -> list[TextRun]:
        return [run for run in self._runs if run.click is not None]

    def __iter__(self) -> Iterator[TextRun]:
        return iter(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    # ---------------- Rendering ----------------

    def markup(self) -> str:
        """Concatenate runs into one markup string ([/] marks reset runs)."""
        return "".join(("[/]" if run.reset else "") + run.text for run in self._runs)

    def plain(self) -> str:
        """Visible text without styles or actions."""
        return strip_markup(self.markup())

    def to_ansi(self) -> str:
        """Render for a terminal; styles flow across runs, actions become hyperlinks."""
        stack: list[tuple[str, str]] = []
        out: list[str] = []
        for run in self._runs:
            if run.reset:
                stack.clear()
                out.append(ANSI["reset"])
            rendered = render_markup(run.text, stack=stack, trailing_reset=False)
            if run.click is not None:
                rendered = hyperlink(rendered, run.click.as_url())
            out.append(rendered)
        if stack:
            out.append(ANSI["reset"])
        return "".join(out)

    def __str__(self) -> str:
        return self.plain()

    def __repr__(self) -> str:
        return f"RichText({self._runs!r})"
