"""Decoding of JSON edit requests.

Two encodings are accepted:

    {"edits": [ ... ]}
    [ ... ]

Each edit is an object with exactly one key naming its kind:

    {"set_line": {"anchor": "2:a3b1", "new_text": "..."}}
    {"replace_lines": {"start_anchor": "2:a3b1", "end_anchor": "4:01fe", "new_text": "..."}}
    {"insert_after": {"anchor": "2:a3b1", "text": "..."}}
    {"replace": {"old_text": "...", "new_text": "...", "all": false}}
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from . import config
from .errors import MalformedRequestPayloadError
from .hashline import parse_anchor
from .line_endings import normalize_to_lf
from .operations import EditOperation, InsertAfter, ReplaceRange, ReplaceSubstring, SetLine


class _EditBody(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class SetLineBody(_EditBody):
    anchor: str
    new_text: str

    def to_operation(self) -> SetLine:
        return SetLine(anchor=parse_anchor(self.anchor), text=normalize_to_lf(self.new_text))


class ReplaceLinesBody(_EditBody):
    start_anchor: str
    end_anchor: str
    new_text: str

    def to_operation(self) -> ReplaceRange:
        return ReplaceRange(
            start=parse_anchor(self.start_anchor),
            end=parse_anchor(self.end_anchor),
            text=normalize_to_lf(self.new_text),
        )


class InsertAfterBody(_EditBody):
    anchor: str
    text: str

    def to_operation(self) -> InsertAfter:
        return InsertAfter(anchor=parse_anchor(self.anchor), text=normalize_to_lf(self.text))


class ReplaceBody(_EditBody):
    old_text: str
    new_text: str
    all: bool | None = None

    def to_operation(self) -> ReplaceSubstring:
        return ReplaceSubstring(
            old_text=normalize_to_lf(self.old_text),
            new_text=normalize_to_lf(self.new_text),
            apply_all=bool(self.all),
        )


EDIT_KINDS: dict[str, type[_EditBody]] = {
    "set_line": SetLineBody,
    "replace_lines": ReplaceLinesBody,
    "insert_after": InsertAfterBody,
    "replace": ReplaceBody,
}


def parse_edit(i: int, item: Any) -> EditOperation:
    """Decode the ``i``-th (0-based) edit object into an operation."""
    if not isinstance(item, dict):
        raise MalformedRequestPayloadError(f"Edit #{i + 1}: operation must be an object")

    kinds = [key for key in item if key in EDIT_KINDS]
    if len(kinds) != 1 or len(item) != 1:
        raise MalformedRequestPayloadError(
            f"Edit #{i + 1}: expected exactly one of {', '.join(EDIT_KINDS)}, "
            f"got keys {sorted(item)}"
        )

    kind = kinds[0]
    try:
        body = EDIT_KINDS[kind].model_validate(item[kind])
    except ValidationError as e:
        raise MalformedRequestPayloadError(f"Edit #{i + 1} ({kind}): {e}") from e
    return body.to_operation()


def parse_edits_payload(payload: str) -> list[EditOperation]:
    """Decode a JSON edits payload into operations.

    Raises:
        MalformedRequestPayloadError: If the payload is not valid JSON or
            does not have one of the accepted shapes.
        InvalidAnchorError: If an anchor is malformed.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedRequestPayloadError(f"Invalid JSON in edits: {e}") from e

    if isinstance(data, dict):
        unknown = set(data) - {"edits"}
        if unknown:
            raise MalformedRequestPayloadError(
                f"Unexpected keys in edits request: {sorted(unknown)}"
            )
        data = data.get("edits", [])

    if not isinstance(data, list):
        raise MalformedRequestPayloadError(
            "edits must be a JSON array of operations or an object with an 'edits' array"
        )

    if len(data) > config.MAX_EDITS:
        raise MalformedRequestPayloadError(
            f"Too many edits in one call (max {config.MAX_EDITS}). Split into multiple calls."
        )

    return [parse_edit(i, item) for i, item in enumerate(data)]
