"""Per-file autofix pipeline.

Runs ``collect -> resolve -> apply -> (rewrite | no-op)`` for one report,
and fans that out across independent files. The patched text is fully
built in memory before the file is opened for writing.
"""

from __future__ import annotations

import concurrent.futures
import difflib
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from sollint.fixers.applier import OverlapInvariantViolation, PatchResult, apply_fixes
from sollint.fixers.collector import FixCandidate, collect_fixes
from sollint.fixers.resolver import resolve_conflicts

if TYPE_CHECKING:
    from sollint.analyzer.base import Report


@dataclass
class FileFixResult:
    """Outcome of running the autofix pipeline on one file.

    Attributes:
        original: Report as produced by the analyzer.
        report: Report with fixed diagnostics removed.
        patch: Patched text and whether any fix was applied.
        accepted: Fixes that were applied.
        rejected: Fixes dropped because they overlapped an accepted fix.
        written: Whether the file on disk was rewritten.
        error: Message describing why the file was skipped, if it was.
    """

    original: Report
    report: Report
    patch: PatchResult
    accepted: list[FixCandidate] = field(default_factory=list)
    rejected: list[FixCandidate] = field(default_factory=list)
    written: bool = False
    error: str | None = None

    @property
    def file_path(self) -> str:
        return self.report.file_path

    @property
    def changed(self) -> bool:
        return self.patch.changed

    @property
    def fixed_count(self) -> int:
        return len(self.accepted)

    def diff(self) -> str:
        """Render a unified diff between the original and patched text."""
        lines = difflib.unified_diff(
            self.original.source.splitlines(keepends=True),
            self.patch.output.splitlines(keepends=True),
            fromfile=f"a/{self.file_path}",
            tofile=f"b/{self.file_path}",
        )
        return "".join(lines)


def prune_report(report: Report, accepted: Sequence[FixCandidate]) -> Report:
    """Remove diagnostics whose fix was applied.

    Diagnostics with rejected or failed fixes stay in the report.

    Args:
        report: Report the candidates were collected from.
        accepted: Candidates whose fixes were applied.

    Returns:
        A new Report without the fixed diagnostics.
    """
    fixed = {candidate.order for candidate in accepted}
    remaining = tuple(
        diagnostic
        for order, diagnostic in enumerate(report.diagnostics)
        if order not in fixed
    )
    return replace(report, diagnostics=remaining)


def rewrite_file(path: Path, output: str) -> None:
    """Write patched text to a file.

    Newlines are written untranslated so that bytes outside the fixed
    ranges are preserved.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(output)


def fix_report(report: Report, *, dry_run: bool = False) -> FileFixResult:
    """Run the autofix pipeline on one report.

    Args:
        report: Analyzer report for a single file.
        dry_run: If True, compute the patch but never touch the file.

    Returns:
        FileFixResult with the pruned report and the patch.

    Raises:
        OverlapInvariantViolation: If conflict resolution produced
            overlapping edits.
        OSError: If rewriting the file fails. The file is not opened until
            the patched text is complete.
    """
    candidates = collect_fixes(report)
    resolution = resolve_conflicts(candidates)
    patch = apply_fixes(report.source, [c.fix for c in resolution.accepted])

    if not patch.changed:
        return FileFixResult(
            original=report,
            report=report,
            patch=patch,
            rejected=resolution.rejected,
        )

    written = False
    if not dry_run and patch.output != report.source:
        rewrite_file(Path(report.file_path), patch.output)
        written = True

    return FileFixResult(
        original=report,
        report=prune_report(report, resolution.accepted),
        patch=patch,
        accepted=resolution.accepted,
        rejected=resolution.rejected,
        written=written,
    )


def _fix_isolated(report: Report, dry_run: bool) -> FileFixResult:
    try:
        return fix_report(report, dry_run=dry_run)
    except OverlapInvariantViolation as e:
        return FileFixResult(
            original=report,
            report=report,
            patch=PatchResult(changed=False, output=report.source),
            error=f"Fixes not applied: {e}",
        )


def fix_reports(
    reports: Sequence[Report],
    *,
    dry_run: bool = False,
    parallel: bool = True,
) -> list[FileFixResult]:
    """Run the autofix pipeline on several independent files.

    An OverlapInvariantViolation only affects the file it occurred in:
    that file is left untouched and its result carries an error message.
    I/O errors propagate to the caller.

    Args:
        reports: One report per file.
        dry_run: If True, no file is written.
        parallel: Whether to process files on a thread pool.

    Returns:
        Results in the same order as ``reports``.
    """
    if not parallel or len(reports) < 2:
        return [_fix_isolated(report, dry_run) for report in reports]

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=min(len(reports), 8)
    ) as executor:
        return list(executor.map(lambda r: _fix_isolated(r, dry_run), reports))
