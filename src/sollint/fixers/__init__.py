"""Autofix pipeline for sollint.

Turns the fix producers attached to diagnostics into a single
conflict-free rewrite of each source file.
"""

from __future__ import annotations

from sollint.fixers.applier import OverlapInvariantViolation, PatchResult, apply_fixes
from sollint.fixers.collector import FixCandidate, collect_fixes
from sollint.fixers.descriptor import (
    FixDescriptor,
    FixDescriptorFactory,
    InvalidRangeError,
    Range,
)
from sollint.fixers.pipeline import (
    FileFixResult,
    fix_report,
    fix_reports,
    prune_report,
    rewrite_file,
)
from sollint.fixers.resolver import Resolution, resolve_conflicts, sort_candidates

__all__ = [
    # Edit primitives
    "FixDescriptor",
    "FixDescriptorFactory",
    "InvalidRangeError",
    "Range",
    # Pipeline stages
    "FixCandidate",
    "collect_fixes",
    "Resolution",
    "resolve_conflicts",
    "sort_candidates",
    "OverlapInvariantViolation",
    "PatchResult",
    "apply_fixes",
    # Orchestration
    "FileFixResult",
    "fix_report",
    "fix_reports",
    "prune_report",
    "rewrite_file",
]
