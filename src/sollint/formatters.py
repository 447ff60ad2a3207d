"""Report formatters for sollint.

Each formatter turns a list of reports into something a rich Console can
print: plain strings for machine-readable formats, Text and Table objects
for the human-readable ones.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from sollint.analyzer.base import Diagnostic, Report

Formatter = Callable[[Sequence[Report]], RenderableType]

SEVERITY_STYLES = {
    "error": "red",
    "warning": "yellow",
}


class UnknownFormatterError(ValueError):
    """Raised when a formatter name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unknown formatter '{name}' (available: {', '.join(sorted(FORMATTERS))})"
        )


@dataclass
class Summary:
    """Problem counts across a set of reports."""

    errors: int = 0
    warnings: int = 0
    fixable_errors: int = 0
    fixable_warnings: int = 0

    @property
    def problems(self) -> int:
        return self.errors + self.warnings


def summarize(reports: Sequence[Report]) -> Summary:
    summary = Summary()
    for report in reports:
        fixable_errors = sum(
            1 for d in report.diagnostics if d.fixable and d.severity == "error"
        )
        summary.errors += report.error_count
        summary.warnings += report.warning_count
        summary.fixable_errors += fixable_errors
        summary.fixable_warnings += report.fixable_count - fixable_errors
    return summary


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _sorted_diagnostics(report: Report) -> list[tuple[int, int, Diagnostic]]:
    rows = [(*report.position(d.location.start), d) for d in report.diagnostics]
    return sorted(rows, key=lambda row: (row[0], row[1]))


def format_stylish(reports: Sequence[Report]) -> RenderableType:
    """Group problems by file, one aligned line per problem."""
    output = Text()
    summary = summarize(reports)

    for report in reports:
        if not report.diagnostics:
            continue
        rows = _sorted_diagnostics(report)
        pos_width = max(len(f"{line}:{column}") for line, column, _ in rows)
        msg_width = max(len(d.message) for _, _, d in rows)

        output.append("\n")
        output.append(report.file_path, style="underline")
        output.append("\n")
        for line, column, diagnostic in rows:
            output.append(f"  {f'{line}:{column}':<{pos_width}}  ", style="dim")
            output.append(
                f"{diagnostic.severity:<7}", style=SEVERITY_STYLES[diagnostic.severity]
            )
            output.append(f"  {diagnostic.message:<{msg_width}}  ")
            output.append(diagnostic.rule_id, style="dim")
            output.append("\n")

    if summary.problems == 0:
        return output

    style = "bold red" if summary.errors else "bold yellow"
    output.append("\n")
    output.append(
        f"✖ {_plural(summary.problems, 'problem')} "
        f"({_plural(summary.errors, 'error')}, {_plural(summary.warnings, 'warning')})\n",
        style=style,
    )
    if summary.fixable_errors or summary.fixable_warnings:
        output.append(
            f"  {_plural(summary.fixable_errors, 'error')} and "
            f"{_plural(summary.fixable_warnings, 'warning')} potentially fixable "
            "with the `--fix` option.\n",
            style=style,
        )
    return output


def format_unix(reports: Sequence[Report]) -> RenderableType:
    """One ``path:line:column: message [Severity/rule]`` line per problem."""
    lines: list[str] = []
    for report in reports:
        for line, column, diagnostic in _sorted_diagnostics(report):
            lines.append(
                f"{report.file_path}:{line}:{column}: {diagnostic.message} "
                f"[{diagnostic.severity.capitalize()}/{diagnostic.rule_id}]"
            )

    problems = summarize(reports).problems
    if problems:
        lines.append("")
        lines.append(_plural(problems, "problem"))
    return "\n".join(lines)


def format_tap(reports: Sequence[Report]) -> RenderableType:
    """Test Anything Protocol output, one test per file."""
    lines = ["TAP version 13", f"1..{len(reports)}"]
    for index, report in enumerate(reports, start=1):
        if not report.diagnostics:
            lines.append(f"ok {index} - {report.file_path}")
            continue
        lines.append(f"not ok {index} - {report.file_path}")
        lines.append("  ---")
        lines.append("  messages:")
        for line, column, diagnostic in _sorted_diagnostics(report):
            lines.append(f"    - message: {json.dumps(diagnostic.message)}")
            lines.append(f"      severity: {diagnostic.severity}")
            lines.append(f"      ruleId: {diagnostic.rule_id}")
            lines.append(f"      line: {line}")
            lines.append(f"      column: {column}")
        lines.append("  ...")
    return "\n".join(lines)


def report_to_dict(report: Report) -> dict[str, Any]:
    """Serialize a report for the JSON formatter."""
    messages = [
        {
            "ruleId": diagnostic.rule_id,
            "severity": diagnostic.severity,
            "message": diagnostic.message,
            "line": line,
            "column": column,
            "range": [diagnostic.location.start, diagnostic.location.end],
            "fixable": diagnostic.fixable,
        }
        for line, column, diagnostic in _sorted_diagnostics(report)
    ]
    summary = summarize([report])
    return {
        "filePath": report.file_path,
        "messages": messages,
        "errorCount": summary.errors,
        "warningCount": summary.warnings,
        "fixableErrorCount": summary.fixable_errors,
        "fixableWarningCount": summary.fixable_warnings,
    }


def format_json(reports: Sequence[Report]) -> RenderableType:
    """A JSON array with one object per file."""
    return json.dumps([report_to_dict(report) for report in reports], indent=2)


def format_table(reports: Sequence[Report]) -> RenderableType:
    """A single rich table listing every problem."""
    table = Table(title="sollint", show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    table.add_column("Rule", style="dim")

    for report in reports:
        for line, column, diagnostic in _sorted_diagnostics(report):
            color = SEVERITY_STYLES[diagnostic.severity]
            table.add_row(
                Text(report.file_path),
                str(line),
                str(column),
                Text(diagnostic.severity, style=color),
                Text(diagnostic.message),
                diagnostic.rule_id,
            )

    summary = summarize(reports)
    table.caption = (
        f"{_plural(summary.errors, 'error')}, {_plural(summary.warnings, 'warning')}"
    )
    return table


FORMATTERS: dict[str, Formatter] = {
    "stylish": format_stylish,
    "unix": format_unix,
    "tap": format_tap,
    "json": format_json,
    "table": format_table,
}


def get_formatter(name: str) -> Formatter:
    """Look up a formatter by name.

    Raises:
        UnknownFormatterError: If no formatter has that name.
    """
    try:
        return FORMATTERS[name]
    except KeyError:
        raise UnknownFormatterError(name) from None
