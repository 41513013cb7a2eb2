"""Edit operations consumed by the applier.

Three kinds are addressed by anchors; ReplaceSubstring is addressed by content
and never touches anchors. Operations are immutable: resolution produces new
instances with relocated anchors instead of editing these in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .hashline import LineRef


@dataclass(frozen=True)
class SetLine:
    """Replace one line with ``text`` (which may span several lines)."""

    anchor: LineRef
    text: str


@dataclass(frozen=True)
class ReplaceRange:
    """Replace lines ``start``..``end`` inclusive with ``text``."""

    start: LineRef
    end: LineRef
    text: str


@dataclass(frozen=True)
class InsertAfter:
    """Insert ``text`` directly below the anchored line."""

    anchor: LineRef
    text: str


@dataclass(frozen=True)
class ReplaceSubstring:
    """Replace the first (or every) occurrence of ``old_text`` in the joined file."""

    old_text: str
    new_text: str
    apply_all: bool = False


EditOperation = Union[SetLine, ReplaceRange, InsertAfter, ReplaceSubstring]


def split_text(text: str) -> list[str]:
    """Split replacement text into lines; empty text means no lines."""
    if not text:
        return []
    return text.split("\n")
