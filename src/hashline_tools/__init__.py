"""
Hashline - anchor-based text file editing.

Lines are addressed as LINE:HASH, where HASH is a short whitespace-insensitive
fingerprint of the line's content. Edits whose anchors no longer match the
file are relocated when possible and rejected otherwise.

Usage:
    from hashline_tools import apply_edits, compute_line_hash, parse_anchor
    from hashline_tools.operations import SetLine

    lines = ["alpha", "beta", "gamma"]
    anchor = parse_anchor(f"2:{compute_line_hash('beta')}")
    apply_edits(lines, [SetLine(anchor=anchor, text="B1\\nB2")])
"""

from .applier import apply_edits
from .errors import HashlineError, StaleAnchorsError
from .hashline import FingerprintIndex, LineRef, compute_line_hash, format_hashlines, parse_anchor
from .payload import parse_edits_payload
from .resolver import Mismatch, resolve
from .service import EditResult, edit_file, edit_text, read_hashlines

__version__ = "0.1.0"

__all__ = [
    "EditResult",
    "FingerprintIndex",
    "HashlineError",
    "LineRef",
    "Mismatch",
    "StaleAnchorsError",
    "apply_edits",
    "compute_line_hash",
    "edit_file",
    "edit_text",
    "format_hashlines",
    "parse_anchor",
    "parse_edits_payload",
    "read_hashlines",
    "resolve",
]
