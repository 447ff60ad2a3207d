"""Ordering and conflict resolution for collected fixes."""

from __future__ import annotations

from dataclasses import dataclass, field

from sollint.fixers.collector import FixCandidate


@dataclass
class Resolution:
    """Outcome of conflict resolution for one file.

    Attributes:
        accepted: Non-overlapping candidates sorted by range start.
        rejected: Candidates dropped because they overlap an accepted one.
    """

    accepted: list[FixCandidate] = field(default_factory=list)
    rejected: list[FixCandidate] = field(default_factory=list)


def sort_candidates(candidates: list[FixCandidate]) -> list[FixCandidate]:
    """Sort candidates by range start, earlier diagnostics first on ties."""
    return sorted(candidates, key=lambda c: (c.fix.range.start, c.order))


def resolve_conflicts(candidates: list[FixCandidate]) -> Resolution:
    """Select a non-overlapping subset of candidates.

    Greedy earliest-start-first scan: a candidate is accepted when it
    starts at or after the end of the last accepted edit. Adjacent edits
    (``a.end == b.start``) are both accepted.

    Args:
        candidates: Collector output, in any order.

    Returns:
        Resolution with accepted and rejected candidates.
    """
    resolution = Resolution()
    cursor = 0

    for candidate in sort_candidates(candidates):
        if candidate.fix.range.start >= cursor:
            resolution.accepted.append(candidate)
            cursor = candidate.fix.range.end
        else:
            resolution.rejected.append(candidate)

    return resolution
