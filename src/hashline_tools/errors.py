"""Hashline Error Hierarchy.

All hashline-specific exceptions inherit from HashlineError so callers can:
- Catch every anchor/edit failure with one except clause
- Tell machine-recoverable failures (stale anchors) from caller mistakes
- Serialize failures for tool responses with to_dict()

Error Categories:
- AnchorError: malformed or out-of-range LINE:HASH anchors, stale anchors
- RequestError: undecodable edit payloads
- EditError: edit batches that cannot be applied
- FileAccessError: reading or writing the target file failed
"""

from __future__ import annotations

from dataclasses import asdict
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .resolver import Mismatch


class ErrorCategory(StrEnum):
    """High-level error categories."""

    ANCHOR = "anchor"
    REQUEST = "request"
    EDIT = "edit"
    IO = "io"


class HashlineError(Exception):
    """Base exception for all hashline errors.

    Every error aborts the whole edit batch; nothing is written when one is
    raised. ``retry_allowed`` is True only when re-reading the file and
    resubmitting corrected anchors can succeed.
    """

    error_code: str = "HASHLINE_ERROR"
    category: ErrorCategory = ErrorCategory.EDIT
    retry_allowed: bool = False

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        category: ErrorCategory | None = None,
        retry_allowed: bool | None = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if category is not None:
            self.category = category
        if retry_allowed is not None:
            self.retry_allowed = retry_allowed

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "category": self.category.value,
            "retry_allowed": self.retry_allowed,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.error_code}, message={self.message!r})"


# =============================================================================
# Anchor Errors
# =============================================================================


class AnchorError(HashlineError):
    """Base exception for anchor-related errors."""

    error_code = "ANCHOR_ERROR"
    category = ErrorCategory.ANCHOR


class InvalidAnchorError(AnchorError):
    """Raised when an anchor token is not of the form LINE:HASH."""

    error_code = "INVALID_ANCHOR"


class OutOfRangeError(AnchorError):
    """Raised when an anchor or range points past the end of the file."""

    error_code = "OUT_OF_RANGE"


class StaleAnchorsError(AnchorError):
    """Raised when one or more anchors no longer match the file.

    Carries every mismatch of the batch so a caller can correct all anchors
    in one round trip.
    """

    error_code = "STALE_ANCHORS"
    retry_allowed = True

    def __init__(self, message: str, mismatches: list[Mismatch]):
        super().__init__(message)
        self.mismatches = list(mismatches)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["mismatches"] = [asdict(m) for m in self.mismatches]
        return data


# =============================================================================
# Request Errors
# =============================================================================


class MalformedRequestPayloadError(HashlineError):
    """Raised when the edits payload is not valid JSON or has the wrong shape."""

    error_code = "MALFORMED_REQUEST"
    category = ErrorCategory.REQUEST


# =============================================================================
# Edit Errors
# =============================================================================


class EditError(HashlineError):
    """Base exception for edit application errors."""

    error_code = "EDIT_ERROR"
    category = ErrorCategory.EDIT


class InvalidRangeError(EditError):
    """Raised when a range's start line comes after its end line."""

    error_code = "INVALID_RANGE"


class EmptyInsertTextError(EditError):
    """Raised when insert_after carries no text."""

    error_code = "EMPTY_INSERT_TEXT"


class EmptyOldTextError(EditError):
    """Raised when a substring replace has an empty old_text."""

    error_code = "EMPTY_OLD_TEXT"


class SubstringNotFoundError(EditError):
    """Raised when a substring replace finds nothing to replace."""

    error_code = "SUBSTRING_NOT_FOUND"


class OverlappingEditsError(EditError):
    """Raised when two line edits in one batch touch the same lines."""

    error_code = "OVERLAPPING_EDITS"


class NoEffectiveChangeError(EditError):
    """Raised when a non-empty batch leaves the file exactly as it was."""

    error_code = "NO_EFFECTIVE_CHANGE"


# =============================================================================
# I/O Errors
# =============================================================================


class FileAccessError(HashlineError):
    """Raised when the target file cannot be read or written."""

    error_code = "FILE_ACCESS_ERROR"
    category = ErrorCategory.IO
