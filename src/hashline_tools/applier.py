"""Apply a batch of edit operations to a line sequence.

A batch is applied all-or-nothing:

1. Validate operation payloads (empty insert text, empty old text)
2. Resolve every anchor against the unmodified lines
3. Reject overlapping line edits
4. Apply line edits bottom-up so no splice moves a line a later edit targets
5. Apply substring replacements on the joined result
6. Reject the batch if the result equals the input

The input list is never modified; the new lines are returned.
"""

from __future__ import annotations

from .errors import (
    EmptyInsertTextError,
    EmptyOldTextError,
    NoEffectiveChangeError,
    OutOfRangeError,
    OverlappingEditsError,
    SubstringNotFoundError,
)
from .logging_config import get_logger
from .operations import (
    EditOperation,
    InsertAfter,
    ReplaceRange,
    ReplaceSubstring,
    SetLine,
    split_text,
)
from .resolver import resolve_operations

logger = get_logger(__name__)


def apply_edits(lines: list[str], operations: list[EditOperation]) -> list[str]:
    """Apply ``operations`` to ``lines`` and return the new lines.

    An empty batch returns a copy of ``lines`` unchanged.

    Raises:
        HashlineError: Any subclass; nothing is applied when raised.
    """
    if not operations:
        return list(lines)

    for i, op in enumerate(operations):
        _validate(i, op)

    resolved = resolve_operations(operations, lines)
    _check_overlaps(resolved)

    working = list(lines)
    for op in sorted(resolved, key=_sort_key, reverse=True):
        working = _apply_one(working, op)

    if working == lines:
        raise NoEffectiveChangeError("No changes made (edits produced identical content)")

    logger.info(
        "batch applied",
        operations=len(operations),
        lines_before=len(lines),
        lines_after=len(working),
    )
    return working


def _validate(i: int, op: EditOperation) -> None:
    if isinstance(op, InsertAfter) and not op.text:
        raise EmptyInsertTextError(f"Edit #{i + 1} (insert_after): text must be non-empty")
    if isinstance(op, ReplaceSubstring) and not op.old_text:
        raise EmptyOldTextError(f"Edit #{i + 1} (replace): old_text must be non-empty")


def _sort_key(op: EditOperation) -> tuple[int, int]:
    # Applied in descending order; an insert below line N runs before a
    # replacement of line N, substring edits run last.
    if isinstance(op, SetLine):
        return (op.anchor.line, 0)
    if isinstance(op, ReplaceRange):
        return (op.end.line, 0)
    if isinstance(op, InsertAfter):
        return (op.anchor.line, 1)
    return (0, 9)


def _check_overlaps(operations: list[EditOperation]) -> None:
    """Reject line edits that replace the same line or insert inside a replaced span."""
    spans = []  # (start, end, op number)
    inserts = []  # (line, op number)
    for i, op in enumerate(operations, start=1):
        if isinstance(op, SetLine):
            spans.append((op.anchor.line, op.anchor.line, i))
        elif isinstance(op, ReplaceRange):
            spans.append((op.start.line, op.end.line, i))
        elif isinstance(op, InsertAfter):
            inserts.append((op.anchor.line, i))

    for j, (s_a, e_a, op_a) in enumerate(spans):
        for s_b, e_b, op_b in spans[j + 1 :]:
            if s_a <= e_b and s_b <= e_a:
                raise OverlappingEditsError(
                    f"Overlapping edits: edit #{op_a} and edit #{op_b} "
                    f"affect overlapping line ranges"
                )

    # Inserting below the last line of a span is fine, below any other
    # line of it the inserted text would be swallowed by the replacement.
    for line, op_i in inserts:
        for start, end, op_s in spans:
            if start <= line < end:
                raise OverlappingEditsError(
                    f"Overlapping edits: edit #{op_i} inserts inside the range "
                    f"replaced by edit #{op_s}"
                )


def _apply_one(lines: list[str], op: EditOperation) -> list[str]:
    if isinstance(op, SetLine):
        at = op.anchor.line - 1
        if not 0 <= at < len(lines):
            raise OutOfRangeError(
                f"Line {op.anchor.line} does not exist (file has {len(lines)} lines)"
            )
        lines[at : at + 1] = split_text(op.text)
        return lines

    if isinstance(op, ReplaceRange):
        start, end = op.start.line - 1, op.end.line - 1
        if start < 0 or end >= len(lines):
            raise OutOfRangeError(f"Range out of bounds (file has {len(lines)} lines)")
        lines[start : end + 1] = split_text(op.text)
        return lines

    if isinstance(op, InsertAfter):
        if not 1 <= op.anchor.line <= len(lines):
            raise OutOfRangeError(
                f"Line {op.anchor.line} does not exist (file has {len(lines)} lines)"
            )
        lines[op.anchor.line : op.anchor.line] = split_text(op.text)
        return lines

    joined = "\n".join(lines)
    if not op.apply_all and op.old_text not in joined:
        raise SubstringNotFoundError(
            "replace.old_text not found "
            "(note: anchor-based edits in this batch are applied first)"
        )
    if op.apply_all:
        joined = joined.replace(op.old_text, op.new_text)
    else:
        joined = joined.replace(op.old_text, op.new_text, 1)
    return joined.split("\n")
