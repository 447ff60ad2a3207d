"""Lint runner for applying configured rules to source files.

Provides a unified interface to lint source strings, single files, or
many files in parallel, producing one Report per file.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Sequence
from pathlib import Path

from sollint.analyzer.base import BaseRule, Diagnostic, Report, Severity
from sollint.analyzer.rules import BUILTIN_RULES
from sollint.config import SollintConfig
from sollint.fixers.descriptor import Range


class UnknownRuleError(ValueError):
    """Raised when the configuration names a rule that does not exist."""

    def __init__(self, rule_ids: list[str]) -> None:
        self.rule_ids = rule_ids
        super().__init__(f"Unknown rule(s) in configuration: {', '.join(rule_ids)}")


def _severity_for(level: str) -> Severity:
    return "error" if level == "error" else "warning"


class LintRunner:
    """Runs the enabled rules over source text.

    Supports:
    - Linting a string (e.g., standard input)
    - Linting a single file
    - Linting many files in parallel

    The runner holds no state besides the immutable configuration and the
    rule instances derived from it, so one runner may lint files on
    several threads at once.
    """

    # Rule classes available to the runner, in run order
    RULES: dict[str, type[BaseRule]] = BUILTIN_RULES

    def __init__(
        self,
        config: SollintConfig,
        parallel: bool = True,
        max_workers: int = 8,
    ) -> None:
        """Initialize lint runner.

        Args:
            config: Resolved configuration.
            parallel: Whether to lint files in parallel.
            max_workers: Upper bound on worker threads.

        Raises:
            UnknownRuleError: If the configuration names unknown rules.
        """
        unknown = sorted(set(config.rules) - set(self.RULES))
        if unknown:
            raise UnknownRuleError(unknown)

        self.config = config
        self.parallel = parallel
        self.max_workers = max_workers
        self.rules = self._create_rules()

    def _create_rules(self) -> list[BaseRule]:
        """Instantiate every rule not turned off in the configuration."""
        rules: list[BaseRule] = []
        for rule_id, rule_class in self.RULES.items():
            default = "error" if rule_class.default_severity == "error" else "warn"
            level = self.config.rule_level(rule_id, default)
            if level == "off":
                continue
            rules.append(rule_class(_severity_for(level), self.config))
        return rules

    def lint_source(self, source: str, file_path: str = "stdin") -> Report:
        """Lint a source string.

        Args:
            source: Text to lint.
            file_path: Name reported for the text.

        Returns:
            Report with diagnostics sorted by offset. Diagnostics at the
            same offset keep rule order.
        """
        diagnostics: list[Diagnostic] = []

        for rule in self.rules:
            try:
                diagnostics.extend(rule.check(source))
            except Exception as e:
                diagnostics.append(
                    Diagnostic(
                        rule_id=rule.rule_id,
                        severity="error",
                        message=f"Rule failed: {e!s}",
                        location=Range(0, 0),
                    )
                )

        diagnostics.sort(key=lambda d: d.location.start)
        return Report(file_path=file_path, source=source, diagnostics=tuple(diagnostics))

    def lint_file(self, path: Path) -> Report:
        """Read and lint one file.

        Line terminators are read untranslated so that offsets match the
        bytes on disk.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        with path.open(encoding="utf-8", newline="") as handle:
            source = handle.read()
        return self.lint_source(source, str(path))

    def lint_paths(self, paths: Sequence[Path]) -> list[Report]:
        """Lint several files.

        Args:
            paths: Files to lint.

        Returns:
            Reports in the same order as ``paths``.
        """
        if not self.parallel or len(paths) < 2:
            return [self.lint_file(path) for path in paths]

        workers = min(len(paths), self.max_workers)
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.lint_file, paths))
