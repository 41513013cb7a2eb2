"""Anchor validation and relocation.

Every anchor in a batch is checked against the file before anything is
changed. An anchor whose hash no longer matches its line is moved to the one
line elsewhere in the file that carries that hash; if there is no such line,
or several, the anchor is reported as a mismatch. All mismatches of a batch
are reported together.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .diagnostics import render_mismatch_error
from .errors import InvalidRangeError, OutOfRangeError, StaleAnchorsError
from .hashline import FingerprintIndex, LineRef, compute_line_hash
from .logging_config import get_logger
from .operations import EditOperation, InsertAfter, ReplaceRange, SetLine

logger = get_logger(__name__)


@dataclass(frozen=True)
class Mismatch:
    """An anchor that matches neither its line nor a unique line elsewhere.

    ``ambiguous`` is set when the expected hash occurs on two or more lines,
    i.e. relocation was refused rather than impossible.
    """

    line: int
    expected: str
    actual: str
    ambiguous: bool = False


def resolve(ref: LineRef, lines: list[str], index: FingerprintIndex) -> LineRef | Mismatch:
    """Validate one anchor, relocating it when its hash is unique in the file.

    Returns ``ref`` itself when it is valid, a new LineRef when it was
    relocated, or a Mismatch.

    Raises:
        OutOfRangeError: If the anchor is below line 1 or past the last line.
    """
    if ref.line < 1:
        raise OutOfRangeError(f"Anchors are 1-indexed (line must be >= 1), got {ref.line}")
    if ref.line > len(lines):
        raise OutOfRangeError(f"Line {ref.line} does not exist (file has {len(lines)} lines)")

    actual = compute_line_hash(lines[ref.line - 1])
    if actual == ref.hash:
        return ref

    relocated = index.unique_line(ref.hash)
    if relocated is not None:
        logger.debug("anchor relocated", anchor=str(ref), line=relocated)
        return replace(ref, line=relocated)

    return Mismatch(
        line=ref.line,
        expected=ref.hash,
        actual=actual,
        ambiguous=index.count(ref.hash) > 1,
    )


def resolve_operations(
    operations: list[EditOperation], lines: list[str]
) -> list[EditOperation]:
    """Resolve the anchors of every operation against ``lines``.

    Returns new operations whose anchors point at the lines they will edit.
    Substring replacements pass through untouched.

    Raises:
        OutOfRangeError: If any anchor is below line 1 or past the last line.
        InvalidRangeError: If a resolved range starts after it ends.
        StaleAnchorsError: If any anchor could not be resolved.
    """
    index = FingerprintIndex(lines)
    mismatches: list[Mismatch] = []

    def _resolve(ref: LineRef) -> LineRef | None:
        result = resolve(ref, lines, index)
        if isinstance(result, Mismatch):
            mismatches.append(result)
            return None
        return result

    resolved: list[EditOperation] = []
    for op in operations:
        if isinstance(op, SetLine):
            anchor = _resolve(op.anchor)
            resolved.append(replace(op, anchor=anchor or op.anchor))
        elif isinstance(op, InsertAfter):
            anchor = _resolve(op.anchor)
            resolved.append(replace(op, anchor=anchor or op.anchor))
        elif isinstance(op, ReplaceRange):
            start = _resolve(op.start)
            end = _resolve(op.end)
            if start is not None and end is not None and start.line > end.line:
                raise InvalidRangeError(
                    f"replace_lines start line {start.line} is after end line {end.line}"
                )
            resolved.append(replace(op, start=start or op.start, end=end or op.end))
        else:
            resolved.append(op)

    if mismatches:
        logger.info("stale anchors", count=len(mismatches))
        raise StaleAnchorsError(render_mismatch_error(lines, mismatches), mismatches)

    return resolved
