"""Tests for decoding JSON edit requests."""

import json

import pytest

from hashline_tools import config
from hashline_tools.errors import InvalidAnchorError, MalformedRequestPayloadError
from hashline_tools.hashline import LineRef
from hashline_tools.operations import InsertAfter, ReplaceRange, ReplaceSubstring, SetLine
from hashline_tools.payload import parse_edits_payload

EDITS = [
    {"set_line": {"anchor": "2:A3B1", "new_text": "x"}},
    {"replace_lines": {"start_anchor": "3:0001", "end_anchor": "5:0002", "new_text": "y"}},
    {"insert_after": {"anchor": "7:0003", "text": "z"}},
    {"replace": {"old_text": "foo", "new_text": "bar", "all": True}},
]


class TestPayloadShapes:
    """Both accepted request encodings."""

    def test_bare_array(self):
        """A bare array decodes to one operation per edit."""
        ops = parse_edits_payload(json.dumps(EDITS))
        assert ops == [
            SetLine(anchor=LineRef(2, "a3b1"), text="x"),
            ReplaceRange(start=LineRef(3, "0001"), end=LineRef(5, "0002"), text="y"),
            InsertAfter(anchor=LineRef(7, "0003"), text="z"),
            ReplaceSubstring(old_text="foo", new_text="bar", apply_all=True),
        ]

    def test_object_with_edits(self):
        """{"edits": [...]} is equivalent to the bare array."""
        assert parse_edits_payload(json.dumps({"edits": EDITS})) == parse_edits_payload(
            json.dumps(EDITS)
        )

    def test_empty_payloads(self):
        """Zero edits is valid in every encoding."""
        assert parse_edits_payload("[]") == []
        assert parse_edits_payload('{"edits": []}') == []
        assert parse_edits_payload("{}") == []

    def test_replace_all_defaults_false(self):
        """'all' is optional and null means false."""
        (op,) = parse_edits_payload('[{"replace": {"old_text": "a", "new_text": "b"}}]')
        assert op.apply_all is False
        (op,) = parse_edits_payload('[{"replace": {"old_text": "a", "new_text": "b", "all": null}}]')
        assert op.apply_all is False

    def test_crlf_in_text_normalized(self):
        """Replacement text with CRLF is normalized to LF."""
        (op,) = parse_edits_payload(
            json.dumps([{"set_line": {"anchor": "1:0000", "new_text": "a\r\nb"}}])
        )
        assert op.text == "a\nb"


class TestMalformedPayloads:
    """Payloads that must be rejected."""

    @pytest.mark.parametrize("payload", ["", "not json", "[1, 2", "null", "42", '"edits"'])
    def test_not_a_request(self, payload):
        """Invalid JSON or a non-container is rejected."""
        with pytest.raises(MalformedRequestPayloadError):
            parse_edits_payload(payload)

    def test_edit_not_object(self):
        """Each edit must be an object."""
        with pytest.raises(MalformedRequestPayloadError, match="Edit #1"):
            parse_edits_payload('["set_line"]')

    def test_unknown_kind(self):
        """An object matching no kind is rejected."""
        with pytest.raises(MalformedRequestPayloadError, match="exactly one"):
            parse_edits_payload('[{"delete_line": {"anchor": "1:0000"}}]')

    def test_two_kinds(self):
        """An object matching two kinds is rejected."""
        payload = json.dumps([{**EDITS[0], **EDITS[2]}])
        with pytest.raises(MalformedRequestPayloadError, match="exactly one"):
            parse_edits_payload(payload)

    def test_missing_field(self):
        """A body missing a required field is rejected."""
        with pytest.raises(MalformedRequestPayloadError, match="set_line"):
            parse_edits_payload('[{"set_line": {"anchor": "1:0000"}}]')

    def test_wrong_field_type(self):
        """Text fields must be strings."""
        with pytest.raises(MalformedRequestPayloadError):
            parse_edits_payload('[{"insert_after": {"anchor": "1:0000", "text": 5}}]')

    def test_extra_field(self):
        """Unknown fields in a body are rejected."""
        with pytest.raises(MalformedRequestPayloadError):
            parse_edits_payload('[{"set_line": {"anchor": "1:0000", "new_text": "", "x": 1}}]')

    def test_unexpected_top_level_key(self):
        """Only 'edits' is allowed at the top level."""
        with pytest.raises(MalformedRequestPayloadError, match="Unexpected keys"):
            parse_edits_payload('{"edits": [], "path": "x"}')

    def test_edits_not_array(self):
        """'edits' must hold an array."""
        with pytest.raises(MalformedRequestPayloadError):
            parse_edits_payload('{"edits": {"set_line": {}}}')

    def test_too_many_edits(self, monkeypatch):
        """Batches over the configured maximum are rejected."""
        monkeypatch.setattr(config, "MAX_EDITS", 1)
        with pytest.raises(MalformedRequestPayloadError, match="Too many edits"):
            parse_edits_payload(json.dumps(EDITS[:2]))

    def test_invalid_anchor(self):
        """Anchors are parsed during decoding."""
        with pytest.raises(InvalidAnchorError):
            parse_edits_payload('[{"set_line": {"anchor": "0:abcd", "new_text": "x"}}]')
