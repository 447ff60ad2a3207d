"""Tests for patch application."""

from __future__ import annotations

import pytest

from sollint.fixers import (
    FixDescriptor,
    OverlapInvariantViolation,
    PatchResult,
    Range,
    apply_fixes,
)


class TestApplyFixes:
    """Tests for apply_fixes."""

    def test_no_fixes_leaves_source_unchanged(self) -> None:
        result = apply_fixes("contract A {}\n", [])
        assert result == PatchResult(changed=False, output="contract A {}\n")

    def test_two_replacements(self) -> None:
        fixes = [FixDescriptor(Range(0, 2), "XY"), FixDescriptor(Range(3, 5), "ZZ")]
        result = apply_fixes("ab cd ef", fixes)
        assert result.changed is True
        assert result.output == "XY ZZ ef"

    def test_insertion_at_start(self) -> None:
        result = apply_fixes("foo", [FixDescriptor(Range(0, 0), "// ")])
        assert result.output == "// foo"

    def test_insertion_at_end(self) -> None:
        result = apply_fixes("foo", [FixDescriptor(Range(3, 3), "\n")])
        assert result.output == "foo\n"

    def test_deletion(self) -> None:
        result = apply_fixes("a   b", [FixDescriptor(Range(1, 4), "")])
        assert result.output == "ab"

    def test_adjacent_edits(self) -> None:
        fixes = [FixDescriptor(Range(0, 5), "12345"), FixDescriptor(Range(5, 8), "")]
        assert apply_fixes("abcdefgh", fixes).output == "12345"

    def test_whole_source_replacement(self) -> None:
        assert apply_fixes("xyz", [FixDescriptor(Range(0, 3), "A")]).output == "A"

    def test_output_length_matches_edit_deltas(self) -> None:
        source = "pragma solidity ^0.8.0;\ncontract C {}\n"
        fixes = [
            FixDescriptor(Range(0, 6), "PRAGMA!"),
            FixDescriptor(Range(10, 10), "++"),
            FixDescriptor(Range(24, 32), ""),
        ]
        result = apply_fixes(source, fixes)
        expected = len(source) + sum(f.delta for f in fixes)
        assert len(result.output) == expected

    def test_bytes_outside_ranges_are_preserved(self) -> None:
        source = "line one\r\nline\ttwo\r\n"
        result = apply_fixes(source, [FixDescriptor(Range(5, 8), "1")])
        assert result.output == "line 1\r\nline\ttwo\r\n"

    def test_identity_fix_counts_as_changed(self) -> None:
        result = apply_fixes("abc", [FixDescriptor(Range(0, 1), "a")])
        assert result.changed is True
        assert result.output == "abc"

    def test_overlap_raises(self) -> None:
        fixes = [FixDescriptor(Range(0, 5), "a"), FixDescriptor(Range(3, 8), "b")]
        with pytest.raises(OverlapInvariantViolation) as exc_info:
            apply_fixes("0123456789", fixes)
        assert exc_info.value.cursor == 5
        assert exc_info.value.fix.range == Range(3, 8)

    def test_unsorted_input_raises(self) -> None:
        fixes = [FixDescriptor(Range(5, 6), "a"), FixDescriptor(Range(0, 1), "b")]
        with pytest.raises(OverlapInvariantViolation):
            apply_fixes("0123456789", fixes)
