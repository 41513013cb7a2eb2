"""Line-ending normalization around the edit core.

The core only ever sees LF-separated lines without a trailing empty line.
TextDocument remembers what the file looked like on disk so the edited lines
can be written back with the same conventions.
"""

from __future__ import annotations

from dataclasses import dataclass


def detect_line_ending(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def normalize_to_lf(text: str) -> str:
    return text.replace("\r\n", "\n")


def restore_line_endings(text: str, line_ending: str) -> str:
    if line_ending == "\n":
        return text
    return text.replace("\n", line_ending)


def split_lines(text: str) -> list[str]:
    """Split LF-normalized text into lines.

    A trailing newline terminates the last line rather than starting a new,
    empty one, so exactly one trailing empty segment is dropped.
    """
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return parts


@dataclass(frozen=True)
class TextDocument:
    """A file's lines plus the conventions needed to write them back."""

    lines: list[str]
    line_ending: str = "\n"
    trailing_newline: bool = False

    @classmethod
    def from_text(cls, raw: str) -> TextDocument:
        return cls(
            lines=split_lines(normalize_to_lf(raw)),
            line_ending=detect_line_ending(raw),
            trailing_newline=raw.endswith("\n"),
        )

    def render(self, lines: list[str] | None = None) -> str:
        """Join ``lines`` (default: this document's) using the original conventions."""
        out = "\n".join(self.lines if lines is None else lines)
        if self.trailing_newline:
            out += "\n"
        return restore_line_endings(out, self.line_ending)
