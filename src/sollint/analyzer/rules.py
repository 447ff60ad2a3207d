"""Built-in text rules for Solidity sources.

Each rule scans the raw source text line by line and attaches a fix
producer to the diagnostics it knows how to repair.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from sollint.analyzer.base import BaseRule, Diagnostic, FixProducer
from sollint.fixers.descriptor import Range

TAB_WIDTH = 4


@dataclass(frozen=True)
class Line:
    """One physical line of a source text.

    Attributes:
        number: 1-based line number.
        start: Offset of the first character.
        content: Line text without its line terminator.
        next_start: Offset where the following line begins (or the
            source length for the last line).
    """

    number: int
    start: int
    content: str
    next_start: int

    @property
    def end(self) -> int:
        return self.start + len(self.content)

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()


def iter_lines(source: str) -> Iterator[Line]:
    """Yield the physical lines of a source text.

    Both ``\\n`` and ``\\r\\n`` terminators are recognized. A trailing
    newline does not start an extra empty line.
    """
    offset = 0
    pieces = source.split("\n")
    if source.endswith("\n"):
        pieces.pop()

    for number, raw in enumerate(pieces, start=1):
        content = raw[:-1] if raw.endswith("\r") else raw
        next_start = min(offset + len(raw) + 1, len(source))
        yield Line(number, offset, content, next_start)
        offset = next_start


def _remove(location: Range) -> FixProducer:
    return lambda fixer: fixer.remove(location)


def _replace(location: Range, text: str) -> FixProducer:
    return lambda fixer: fixer.replace_range(location, text)


class NoTrailingWhitespaceRule(BaseRule):
    """Reports spaces and tabs at the end of a line."""

    rule_id = "no-trailing-whitespace"
    description = "Disallow trailing whitespace at the end of lines"
    fixable = True

    def check(self, source: str) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for line in iter_lines(source):
            stripped = line.content.rstrip(" \t")
            if len(stripped) == len(line.content):
                continue
            location = Range(line.start + len(stripped), line.end)
            diagnostics.append(
                self.report("Trailing whitespace not allowed", location, _remove(location))
            )
        return diagnostics


class EolLastRule(BaseRule):
    """Requires a newline at the end of non-empty files."""

    rule_id = "eol-last"
    description = "Require a newline at the end of the file"
    fixable = True

    def check(self, source: str) -> list[Diagnostic]:
        if not source or source.endswith("\n"):
            return []
        whole = Range(0, len(source))
        return [
            self.report(
                "Newline required at end of file",
                Range(len(source), len(source)),
                lambda fixer: fixer.insert_after(whole, "\n"),
            )
        ]


class NoTabsIndentRule(BaseRule):
    """Reports indentation that contains tab characters."""

    rule_id = "no-tabs-indent"
    description = f"Indent with spaces, a tab counts as {TAB_WIDTH} spaces"
    fixable = True

    def check(self, source: str) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for line in iter_lines(source):
            body = line.content.lstrip(" \t")
            indent = line.content[: len(line.content) - len(body)]
            if "\t" not in indent:
                continue
            location = Range(line.start, line.start + len(indent))
            diagnostics.append(
                self.report(
                    "Tab character used for indentation",
                    location,
                    _replace(location, indent.replace("\t", " " * TAB_WIDTH)),
                )
            )
        return diagnostics


class NoMultipleEmptyLinesRule(BaseRule):
    """Limits consecutive blank lines to ``max_empty_lines``."""

    rule_id = "no-multiple-empty-lines"
    description = "Disallow more consecutive blank lines than configured"
    fixable = True

    def check(self, source: str) -> list[Diagnostic]:
        limit = self.config.max_empty_lines
        diagnostics: list[Diagnostic] = []
        run: list[Line] = []

        for line in [*iter_lines(source), None]:
            if line is not None and line.is_blank:
                run.append(line)
                continue
            if len(run) > limit:
                location = Range(run[limit].start, run[-1].next_start)
                diagnostics.append(
                    self.report(
                        f"More than {limit} blank line(s) not allowed "
                        f"({len(run)} found)",
                        location,
                        _remove(location),
                    )
                )
            run = []

        return diagnostics


class MaxLineLengthRule(BaseRule):
    """Reports lines longer than ``max_line_length``. Not fixable."""

    rule_id = "max-line-length"
    description = "Limit the length of a line"
    default_severity = "error"

    def check(self, source: str) -> list[Diagnostic]:
        limit = self.config.max_line_length
        return [
            self.report(
                f"Line length must be no more than {limit} but current length is "
                f"{len(line.content)}",
                Range(line.start + limit, line.end),
            )
            for line in iter_lines(source)
            if len(line.content) > limit
        ]


# Run order matters: on equal start offsets the earlier rule's fix wins.
BUILTIN_RULES: dict[str, type[BaseRule]] = {
    rule.rule_id: rule
    for rule in (
        NoTrailingWhitespaceRule,
        NoTabsIndentRule,
        NoMultipleEmptyLinesRule,
        EolLastRule,
        MaxLineLengthRule,
    )
}
