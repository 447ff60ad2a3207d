"""Rule engine for sollint.

Provides the Diagnostic/Report contract, the built-in rules and the
runner that applies them to source files.
"""

from __future__ import annotations

from sollint.analyzer.base import BaseRule, Diagnostic, FixProducer, Report, Severity
from sollint.analyzer.path_filter import collect_files, is_excluded
from sollint.analyzer.rules import (
    BUILTIN_RULES,
    EolLastRule,
    MaxLineLengthRule,
    NoMultipleEmptyLinesRule,
    NoTabsIndentRule,
    NoTrailingWhitespaceRule,
)
from sollint.analyzer.runner import LintRunner, UnknownRuleError

__all__ = [
    # Base types
    "BaseRule",
    "Diagnostic",
    "FixProducer",
    "Report",
    "Severity",
    # Rules
    "BUILTIN_RULES",
    "EolLastRule",
    "MaxLineLengthRule",
    "NoMultipleEmptyLinesRule",
    "NoTabsIndentRule",
    "NoTrailingWhitespaceRule",
    # Runner
    "LintRunner",
    "UnknownRuleError",
    # Paths
    "collect_files",
    "is_excluded",
]
