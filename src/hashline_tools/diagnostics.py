"""Human-readable reports for rejected and previewed edits."""

from __future__ import annotations

from itertools import zip_longest
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver import Mismatch


def render_mismatch_error(lines: list[str], mismatches: list[Mismatch]) -> str:
    """Describe stale anchors and how to fix them.

    Lists the current ``line:hash|content`` for every mismatch next to the
    hash the caller expected, followed by a remap table the caller can apply
    mechanically before resubmitting.
    """
    out = [
        f"{len(mismatches)} line(s) have changed since last read. "
        "Re-read the file and use updated LINE:HASH refs.",
        "",
    ]

    for m in mismatches:
        content = lines[m.line - 1] if 0 < m.line <= len(lines) else ""
        out.append(f">>> {m.line}:{m.actual}|{content}")
        out.append(f"    expected {m.expected}")
        if m.ambiguous:
            out.append(f"    (hash {m.expected} matches several lines; relocation is ambiguous)")
        out.append("")

    out.append("Quick fix: replace stale refs:")
    for m in mismatches:
        out.append(f"  {m.line}:{m.expected} -> {m.line}:{m.actual}")

    return "\n".join(out) + "\n"


def render_basic_diff(old_lines: list[str], new_lines: list[str]) -> str:
    """Line-by-line comparison by position.

    Not a real diff: an insertion shows every following line as changed.
    Unchanged lines are omitted.
    """
    out = []
    for old, new in zip_longest(old_lines, new_lines):
        if old == new:
            continue
        if old is not None:
            out.append(f"-{old}")
        if new is not None:
            out.append(f"+{new}")
    return "\n".join(out)


def render_remap(mismatches: list[Mismatch]) -> dict[str, str]:
    """Map each stale anchor to the anchor currently at that line."""
    return {f"{m.line}:{m.expected}": f"{m.line}:{m.actual}" for m in mismatches}
