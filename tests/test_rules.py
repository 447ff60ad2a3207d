"""Tests for the built-in lint rules."""

from __future__ import annotations

from sollint.analyzer.base import BaseRule, Diagnostic
from sollint.analyzer.rules import (
    BUILTIN_RULES,
    EolLastRule,
    MaxLineLengthRule,
    NoMultipleEmptyLinesRule,
    NoTabsIndentRule,
    NoTrailingWhitespaceRule,
    iter_lines,
)
from sollint.config import SollintConfig
from sollint.fixers import FixDescriptorFactory, Range, apply_fixes


def _rule(rule_class: type[BaseRule], **config: object) -> BaseRule:
    return rule_class("warning", SollintConfig(**config))  # type: ignore[arg-type]


def _fix(source: str, diagnostic: Diagnostic) -> str:
    assert diagnostic.fix is not None
    fix = diagnostic.fix(FixDescriptorFactory.for_source(source))
    assert fix is not None
    return apply_fixes(source, [fix]).output


# -----------------------------------------------------------------------------
# iter_lines Tests
# -----------------------------------------------------------------------------


class TestIterLines:
    """Tests for line splitting with offsets."""

    def test_lines_and_offsets(self) -> None:
        lines = list(iter_lines("ab\ncd\n"))
        assert [(line.number, line.start, line.content, line.next_start) for line in lines] == [
            (1, 0, "ab", 3),
            (2, 3, "cd", 6),
        ]

    def test_last_line_without_newline(self) -> None:
        lines = list(iter_lines("ab\ncd"))
        assert lines[-1].content == "cd"
        assert lines[-1].next_start == 5

    def test_crlf_terminators(self) -> None:
        lines = list(iter_lines("ab\r\ncd\r\n"))
        assert [line.content for line in lines] == ["ab", "cd"]
        assert lines[1].start == 4
        assert lines[0].end == 2

    def test_empty_source(self) -> None:
        assert [line.content for line in iter_lines("")] == [""]


# -----------------------------------------------------------------------------
# Rule Tests
# -----------------------------------------------------------------------------


class TestNoTrailingWhitespaceRule:
    """Tests for no-trailing-whitespace."""

    def test_reports_trailing_spaces_and_tabs(self) -> None:
        source = "uint a; \t\nuint b;\n"
        diagnostics = _rule(NoTrailingWhitespaceRule).check(source)
        assert len(diagnostics) == 1
        assert diagnostics[0].location == Range(7, 9)
        assert diagnostics[0].rule_id == "no-trailing-whitespace"

    def test_fix_removes_whitespace(self) -> None:
        source = "uint a;   \r\n"
        [diagnostic] = _rule(NoTrailingWhitespaceRule).check(source)
        assert _fix(source, diagnostic) == "uint a;\r\n"

    def test_clean_source(self) -> None:
        assert _rule(NoTrailingWhitespaceRule).check("a\nb\n") == []


class TestEolLastRule:
    """Tests for eol-last."""

    def test_missing_newline(self) -> None:
        source = "contract A {}"
        [diagnostic] = _rule(EolLastRule).check(source)
        assert diagnostic.location == Range(13, 13)
        assert _fix(source, diagnostic) == "contract A {}\n"

    def test_present_newline(self) -> None:
        assert _rule(EolLastRule).check("contract A {}\n") == []

    def test_empty_file(self) -> None:
        assert _rule(EolLastRule).check("") == []


class TestNoTabsIndentRule:
    """Tests for no-tabs-indent."""

    def test_replaces_tabs_in_indent(self) -> None:
        source = "{\n\t  \tx;\n}\n"
        [diagnostic] = _rule(NoTabsIndentRule).check(source)
        assert diagnostic.location == Range(2, 6)
        assert _fix(source, diagnostic) == "{\n" + " " * 10 + "x;\n}\n"

    def test_tabs_after_code_are_ignored(self) -> None:
        assert _rule(NoTabsIndentRule).check("x;\t// c\n") == []


class TestNoMultipleEmptyLinesRule:
    """Tests for no-multiple-empty-lines."""

    def test_default_limit(self) -> None:
        source = "a\n\n\n\nb\n"
        [diagnostic] = _rule(NoMultipleEmptyLinesRule).check(source)
        assert "3 found" in diagnostic.message
        assert _fix(source, diagnostic) == "a\n\nb\n"

    def test_custom_limit(self) -> None:
        source = "a\n\n\n\nb\n"
        [diagnostic] = _rule(NoMultipleEmptyLinesRule, max_empty_lines=2).check(source)
        assert _fix(source, diagnostic) == "a\n\n\nb\n"

    def test_zero_limit(self) -> None:
        source = "a\n\nb\n"
        [diagnostic] = _rule(NoMultipleEmptyLinesRule, max_empty_lines=0).check(source)
        assert _fix(source, diagnostic) == "a\nb\n"

    def test_trailing_blank_lines(self) -> None:
        source = "a\n\n\n"
        [diagnostic] = _rule(NoMultipleEmptyLinesRule).check(source)
        assert _fix(source, diagnostic) == "a\n\n"

    def test_within_limit(self) -> None:
        assert _rule(NoMultipleEmptyLinesRule).check("a\n\nb\n") == []


class TestMaxLineLengthRule:
    """Tests for max-line-length."""

    def test_long_line(self) -> None:
        source = "x" * 12 + "\nshort\n"
        [diagnostic] = _rule(MaxLineLengthRule, max_line_length=10).check(source)
        assert diagnostic.location == Range(10, 12)
        assert diagnostic.fix is None
        assert "no more than 10" in diagnostic.message
        assert "current length is 12" in diagnostic.message

    def test_exact_limit_is_fine(self) -> None:
        assert _rule(MaxLineLengthRule, max_line_length=5).check("12345\n") == []


class TestBuiltinRules:
    """Tests for the rule registry."""

    def test_registry_ids_match_classes(self) -> None:
        for rule_id, rule_class in BUILTIN_RULES.items():
            assert rule_class.rule_id == rule_id
            assert rule_class.description

    def test_fixable_flags(self) -> None:
        assert BUILTIN_RULES["no-trailing-whitespace"].fixable is True
        assert BUILTIN_RULES["max-line-length"].fixable is False

    def test_trailing_whitespace_runs_before_blank_lines(self) -> None:
        ids = list(BUILTIN_RULES)
        assert ids.index("no-trailing-whitespace") < ids.index("no-multiple-empty-lines")

    def test_diagnostics_use_rule_severity(self) -> None:
        rule = NoTrailingWhitespaceRule("error", SollintConfig())
        [diagnostic] = rule.check("a \n")
        assert diagnostic.severity == "error"
