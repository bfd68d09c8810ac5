#!/usr/bin/env python3
# switchboard/commands/navigation.py
from __future__ import annotations

"""
Navigation markers for paginated help headers and footers.

A template may contain a previous-page marker and a next-page marker, each
matched on first occurrence only:

    "%prev_clickable% Page %page%/%max_page% %next_clickable%"

Splitting rule (plain string search, no nesting):
  1) split the whole text at the previous marker   -> before / after
  2) split `before` at the next marker              -> before_head / before_tail
  3) split `after` (if any) at the next marker      -> after_head / after_tail

Rendering emits before_head as unstyled base text, then a next control and
before_tail, then a previous control and after_head, then a second next
control and after_tail, each part only when its region exists.
"""

from dataclasses import dataclass
from typing import Protocol

from switchboard.config.messages import apply_placeholders
from switchboard.ui import RichText

PREV_MARKER = "%prev_clickable%"
NEXT_MARKER = "%next_clickable%"


@dataclass(frozen=True, slots=True)
class NavigationSplit:
    """Regions of a template; None marks a region whose marker was absent."""
    before_head: str
    before_tail: str | None = None
    after_head: str | None = None
    after_tail: str | None = None


class NavigationControls(Protocol):
    """Appends the clickable (or inert) previous/next controls."""

    def append_next(self, document: RichText, page: int, max_page: int) -> None: ...  # pragma: no cover

    def append_previous(self, document: RichText, page: int, max_page: int) -> None: ...  # pragma: no cover


def _split_once(text: str, marker: str) -> tuple[str, str | None]:
    head, found, tail = text.partition(marker)
    return (head, tail) if found else (text, None)


def split_navigation(text: str) -> NavigationSplit:
    """Split a template into its marker regions."""
    before, after = _split_once(text, PREV_MARKER)
    before_head, before_tail = _split_once(before, NEXT_MARKER)
    if after is None:
        return NavigationSplit(before_head, before_tail)
    after_head, after_tail = _split_once(after, NEXT_MARKER)
    return NavigationSplit(before_head, before_tail, after_head, after_tail)


def render_navigation(
    document: RichText,
    template: str,
    page: int,
    max_page: int,
    controls: NavigationControls,
) -> RichText:
    """Substitute %page%/%max_page%, then splice controls in at the markers."""
    text = apply_placeholders(template, {"page": page, "max_page": max_page})
    split = split_navigation(text)

    document.append(split.before_head, reset=True)
    if split.before_tail is not None:
        controls.append_next(document, page, max_page)
        document.append(split.before_tail)
    if split.after_head is not None:
        controls.append_previous(document, page, max_page)
        document.append(split.after_head)
    if split.after_tail is not None:
        controls.append_next(document, page, max_page)
        document.append(split.after_tail)
    return document
