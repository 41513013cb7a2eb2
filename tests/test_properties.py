"""Property-based tests for fingerprints and batch application."""

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from hashline_tools.applier import apply_edits
from hashline_tools.errors import HashlineError
from hashline_tools.hashline import WHITESPACE, FingerprintIndex, LineRef, compute_line_hash
from hashline_tools.operations import InsertAfter, SetLine
from hashline_tools.resolver import Mismatch, resolve

line_text = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\n\r"), max_size=40
)
whitespace = st.text(alphabet=" \t\u00a0\u3000", max_size=5)


def _anchor(lines, line_num):
    return LineRef(line=line_num, hash=compute_line_hash(lines[line_num - 1]))


class TestFingerprintProperties:
    """Properties of compute_line_hash."""

    @given(line=line_text)
    def test_whitespace_insensitive(self, line):
        """Hashing ignores every whitespace character."""
        stripped = "".join(ch for ch in line if ch not in WHITESPACE)
        assert compute_line_hash(line) == compute_line_hash(stripped)

    @given(line=line_text, before=whitespace, after=whitespace)
    def test_padding_ignored(self, line, before, after):
        """Surrounding whitespace never changes the hash."""
        assert compute_line_hash(before + line + after) == compute_line_hash(line)

    @given(line=line_text)
    def test_format(self, line):
        """Hashes are always 4 lowercase hex digits."""
        h = compute_line_hash(line)
        assert len(h) == 4
        assert int(h, 16) <= 0xFFFF
        assert h == h.lower()


class TestResolveProperties:
    """Properties of resolve."""

    @given(lines=st.lists(line_text, min_size=1, max_size=20), data=st.data())
    def test_valid_anchor_is_fixed_point(self, lines, data):
        """A matching anchor resolves to itself."""
        line_num = data.draw(st.integers(min_value=1, max_value=len(lines)))
        ref = _anchor(lines, line_num)
        assert resolve(ref, lines, FingerprintIndex(lines)) is ref

    @given(lines=st.lists(line_text, min_size=2, max_size=20), data=st.data())
    def test_relocation_only_to_unique_hash(self, lines, data):
        """Relocated anchors always land on the single line with that hash."""
        line_num = data.draw(st.integers(min_value=1, max_value=len(lines)))
        target = data.draw(st.integers(min_value=1, max_value=len(lines)))
        ref = LineRef(line=line_num, hash=compute_line_hash(lines[target - 1]))
        index = FingerprintIndex(lines)

        result = resolve(ref, lines, index)

        if isinstance(result, Mismatch):
            assert index.count(ref.hash) >= 2
            assert result.ambiguous is True
        elif result.line != line_num:
            assert index.count(ref.hash) == 1
            assert compute_line_hash(lines[result.line - 1]) == ref.hash


class TestBatchProperties:
    """Properties of apply_edits."""

    @given(
        n=st.integers(min_value=2, max_value=30),
        data=st.data(),
        first_text=st.text(alphabet="xyz\n", min_size=1, max_size=10),
        second_text=st.text(alphabet="xyz\n", min_size=1, max_size=10),
    )
    @settings(max_examples=75)
    def test_declared_order_irrelevant(self, n, data, first_text, second_text):
        """Edits at distinct lines give the same result in any order."""
        lines = [f"line {i}" for i in range(1, n + 1)]
        low = data.draw(st.integers(min_value=1, max_value=n - 1))
        high = data.draw(st.integers(min_value=low + 1, max_value=n))
        ops = [
            SetLine(anchor=_anchor(lines, low), text=first_text),
            InsertAfter(anchor=_anchor(lines, high), text=second_text),
        ]

        expected = list(lines)
        expected[high:high] = second_text.split("\n")
        expected[low - 1 : low] = first_text.split("\n")

        assert apply_edits(lines, ops) == expected
        assert apply_edits(lines, list(reversed(ops))) == expected

    @given(lines=st.lists(line_text, min_size=1, max_size=10), data=st.data())
    def test_failure_leaves_input_untouched(self, lines, data):
        """A rejected batch never mutates the input."""
        snapshot = list(lines)
        line_num = data.draw(st.integers(min_value=1, max_value=len(lines)))
        bogus = data.draw(st.sampled_from(["ffff", "0000", "abcd"]))
        assume(bogus not in {compute_line_hash(ln) for ln in lines})

        with pytest.raises(HashlineError):
            apply_edits(lines, [SetLine(anchor=LineRef(line_num, bogus), text="changed")])

        assert lines == snapshot

    @given(lines=st.lists(line_text, min_size=1, max_size=10), data=st.data())
    def test_identity_edit_rejected(self, lines, data):
        """Rewriting a line with its own content is never accepted."""
        line_num = data.draw(st.integers(min_value=1, max_value=len(lines)))
        # empty replacement text deletes the line instead
        assume(lines[line_num - 1] != "")
        op = SetLine(anchor=_anchor(lines, line_num), text=lines[line_num - 1])
        with pytest.raises(HashlineError):
            apply_edits(lines, [op])
