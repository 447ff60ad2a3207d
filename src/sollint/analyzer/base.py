"""Base rule classes and report models for the sollint analyzer.

Provides the Diagnostic and Report contract consumed by the autofix
pipeline, and the BaseRule abstraction built-in rules implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from sollint.fixers.descriptor import FixDescriptor, FixDescriptorFactory, Range

if TYPE_CHECKING:
    from sollint.config import SollintConfig

Severity = Literal["error", "warning"]

FixProducer = Callable[[FixDescriptorFactory], "FixDescriptor | None"]


@dataclass(frozen=True)
class Diagnostic:
    """A single rule violation found in a source file.

    Attributes:
        rule_id: Identifier of the rule that reported it (e.g., "eol-last").
        severity: Severity level ("error" or "warning").
        message: Human-readable description of the problem.
        location: Offsets of the offending text in the source.
        fix: Optional fix producer. Called with a FixDescriptorFactory, it
            returns the edit that resolves this diagnostic.
    """

    rule_id: str
    severity: Severity
    message: str
    location: Range
    fix: FixProducer | None = field(default=None, compare=False, repr=False)

    @property
    def fixable(self) -> bool:
        return self.fix is not None


@dataclass(frozen=True)
class Report:
    """All diagnostics for one source file.

    Attributes:
        file_path: Path of the linted file (or a pseudo name for stdin).
        source: Full source text the diagnostics refer to.
        diagnostics: Diagnostics in the order rules reported them.
    """

    file_path: str
    source: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == "warning")

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fixable)

    def position(self, offset: int) -> tuple[int, int]:
        """Convert a source offset to a 1-based (line, column) pair."""
        offset = min(max(offset, 0), len(self.source))
        line = self.source.count("\n", 0, offset) + 1
        line_start = self.source.rfind("\n", 0, offset) + 1
        return line, offset - line_start + 1

    def errors_only(self) -> Report:
        """Return a copy of the report keeping only error diagnostics."""
        return replace(
            self,
            diagnostics=tuple(d for d in self.diagnostics if d.severity == "error"),
        )


class BaseRule(ABC):
    """Abstract base class for all lint rules.

    Subclasses set ``rule_id`` and implement :meth:`check`. A rule is
    instantiated once per run with its configured severity and the
    resolved configuration.

    Attributes:
        severity: Severity assigned to every diagnostic this rule reports.
        config: Resolved sollint configuration.
    """

    rule_id: str = ""
    description: str = ""
    default_severity: Severity = "warning"
    fixable: bool = False

    def __init__(self, severity: Severity, config: SollintConfig) -> None:
        self.severity = severity
        self.config = config

    @abstractmethod
    def check(self, source: str) -> list[Diagnostic]:
        """Analyze a source text.

        Args:
            source: Complete file contents.

        Returns:
            Diagnostics found, in source order.
        """

    def report(
        self, message: str, location: Range, fix: FixProducer | None = None
    ) -> Diagnostic:
        """Build a Diagnostic attributed to this rule."""
        return Diagnostic(
            rule_id=self.rule_id,
            severity=self.severity,
            message=message,
            location=location,
            fix=fix,
        )
