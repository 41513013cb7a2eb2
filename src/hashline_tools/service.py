"""Read and edit use cases shared by the CLI and the MCP tools.

Both work on raw file text: line endings are normalized before the core runs
and restored afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import config
from .applier import apply_edits
from .diagnostics import render_basic_diff
from .errors import HashlineError, OutOfRangeError
from .files import atomic_write, read_text
from .hashline import format_hashlines
from .line_endings import TextDocument
from .logging_config import get_logger
from .payload import parse_edits_payload

logger = get_logger(__name__)


@dataclass
class EditResult:
    """Outcome of applying an edits payload to a text."""

    content: str
    old_lines: list[str]
    new_lines: list[str]
    operations: int

    @property
    def changed(self) -> bool:
        return self.old_lines != self.new_lines

    def diff(self) -> str:
        return render_basic_diff(self.old_lines, self.new_lines)


def read_hashlines(raw: str, offset: int = 1, limit: int = 0) -> str:
    """Render ``raw`` as LINE:HASH|content lines.

    Args:
        raw: File content as read from disk.
        offset: 1-indexed first line to show.
        limit: Maximum number of lines, 0 means to the end.
    """
    if offset < 1:
        raise OutOfRangeError(f"offset is 1-indexed (must be >= 1), got {offset}")
    if limit < 0:
        raise HashlineError(f"limit must be >= 0, got {limit}")

    lines = TextDocument.from_text(raw).lines
    if offset > max(len(lines), 1):
        raise OutOfRangeError(f"offset {offset} out of range (file has {len(lines)} lines)")

    return format_hashlines(lines, offset=offset, limit=limit)


def edit_text(raw: str, payload: str) -> EditResult:
    """Apply a JSON edits payload to ``raw`` and return the edited text.

    An empty batch leaves the text unchanged.
    """
    document = TextDocument.from_text(raw)
    operations = parse_edits_payload(payload)
    new_lines = apply_edits(document.lines, operations)
    return EditResult(
        content=document.render(new_lines) if operations else raw,
        old_lines=document.lines,
        new_lines=new_lines,
        operations=len(operations),
    )


def read_file(path: str, offset: int = 1, limit: int = 0, encoding: str = config.DEFAULT_ENCODING) -> str:
    return read_hashlines(read_text(path, encoding), offset=offset, limit=limit)


def edit_file(path: str, payload: str, encoding: str = config.DEFAULT_ENCODING) -> EditResult:
    """Apply an edits payload to the file at ``path`` and write it back."""
    result = edit_text(read_text(path, encoding), payload)
    if result.changed:
        atomic_write(path, result.content, encoding)
        logger.info("file updated", path=path, operations=result.operations)
    return result
