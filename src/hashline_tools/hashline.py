"""Hashline utilities for anchor-based file editing.

Each line gets a short content hash anchor (line_number:hash). Callers reference
lines by anchor instead of reproducing text. If the file changed since the
caller read it, the hash won't match and the edit is rejected or relocated.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

import xxhash

from .errors import InvalidAnchorError

_LINE_NUMBER_RE = re.compile(r"[0-9]+")

# Unicode White_Space property. str.isspace() also matches the ASCII
# separators \x1c-\x1f, which are content here.
WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


@dataclass(frozen=True)
class LineRef:
    """A parsed LINE:HASH anchor. ``line`` is 1-indexed."""

    line: int
    hash: str

    def __str__(self) -> str:
        return f"{self.line}:{self.hash}"


def compute_line_hash(line: str) -> str:
    """Compute a 4-char hex hash for a line of text.

    Every whitespace character (including stray carriage returns) is removed
    before hashing, so re-indenting a line does not invalidate its anchor.
    The xxHash32 digest (seed 0) is truncated to its low 16 bits. Collisions
    are expected now and then; relocation only trusts hashes that are unique
    in the file.
    """
    normalized = "".join(ch for ch in line if ch not in WHITESPACE)
    digest = xxhash.xxh32_intdigest(normalized.encode("utf-8"), seed=0)
    return f"{digest & 0xFFFF:04x}"


def format_hashlines(lines: list[str], offset: int = 1, limit: int = 0) -> str:
    """Format lines with N:hhhh|content prefixes.

    Args:
        lines: The file content split into lines.
        offset: 1-indexed start line (default 1).
        limit: Maximum lines to return, 0 means all.

    Returns:
        Formatted string with hashline prefixes.
    """
    start = offset - 1
    if limit > 0:
        selected = lines[start : start + limit]
    else:
        selected = lines[start:]

    return "\n".join(
        f"{offset + i}:{compute_line_hash(line)}|{line}" for i, line in enumerate(selected)
    )


def parse_anchor(anchor: str) -> LineRef:
    """Parse an anchor string like '2:a3b1' into a LineRef.

    The hash part is trimmed and lower-cased; it is not otherwise checked, a
    hash that matches nothing simply surfaces as a stale anchor.

    Raises:
        InvalidAnchorError: If the anchor format is invalid.
    """
    parts = anchor.split(":")
    if len(parts) < 2:
        raise InvalidAnchorError(f"Invalid anchor (no colon): '{anchor}'")
    if len(parts) > 2:
        raise InvalidAnchorError(f"Invalid anchor (too many ':'): '{anchor}'")

    line_part, hash_part = parts
    if not _LINE_NUMBER_RE.fullmatch(line_part):
        raise InvalidAnchorError(f"Invalid line number in anchor: '{anchor}'")
    line_num = int(line_part)
    if line_num == 0:
        raise InvalidAnchorError(f"Anchors are 1-indexed (line must be >= 1): '{anchor}'")

    hash_str = hash_part.strip().lower()
    if not hash_str:
        raise InvalidAnchorError(f"Invalid hash in anchor: '{anchor}'")

    return LineRef(line=line_num, hash=hash_str)


class FingerprintIndex:
    """Hash occurrence counts for one snapshot of a file.

    Built once per edit batch from the pre-edit lines and discarded after.
    """

    def __init__(self, lines: list[str]):
        self.counts: Counter[str] = Counter()
        self.first_line: dict[str, int] = {}
        for line_num, line in enumerate(lines, start=1):
            h = compute_line_hash(line)
            self.counts[h] += 1
            self.first_line.setdefault(h, line_num)

    def count(self, hash_str: str) -> int:
        return self.counts.get(hash_str, 0)

    def unique_line(self, hash_str: str) -> int | None:
        """Return the line holding ``hash_str`` if exactly one line does."""
        if self.counts.get(hash_str) == 1:
            return self.first_line[hash_str]
        return None
