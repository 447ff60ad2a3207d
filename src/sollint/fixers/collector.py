"""Fix collection: run each diagnostic's fix producer once."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sollint.fixers.descriptor import FixDescriptor, FixDescriptorFactory

if TYPE_CHECKING:
    from sollint.analyzer.base import Diagnostic, Report


@dataclass(frozen=True)
class FixCandidate:
    """A diagnostic paired with the edit its fix producer returned.

    Attributes:
        diagnostic: The diagnostic the edit resolves.
        fix: Validated edit against the report's source.
        order: Position of the diagnostic in the report. Breaks ties
            between candidates starting at the same offset.
    """

    diagnostic: Diagnostic
    fix: FixDescriptor
    order: int


def collect_fixes(
    report: Report, factory: FixDescriptorFactory | None = None
) -> list[FixCandidate]:
    """Invoke every fix producer in a report.

    Diagnostics without a producer are skipped. A producer that raises
    (InvalidRangeError or any other exception) or returns None
    contributes nothing, and its diagnostic stays in the report as
    unfixed. Descriptors a producer built without the factory are
    re-checked against the source bounds.

    Args:
        report: Report whose diagnostics are collected.
        factory: Factory handed to producers. Defaults to one bound to
            the report's source.

    Returns:
        Candidates in original diagnostic order. Overlap is not checked.
    """
    factory = factory or FixDescriptorFactory.for_source(report.source)
    candidates: list[FixCandidate] = []

    for order, diagnostic in enumerate(report.diagnostics):
        fix = _produce(diagnostic, factory)
        if fix is not None:
            candidates.append(FixCandidate(diagnostic, fix, order))

    return candidates


def _produce(
    diagnostic: Diagnostic, factory: FixDescriptorFactory
) -> FixDescriptor | None:
    if diagnostic.fix is None:
        return None
    try:
        fix = diagnostic.fix(factory)
        if fix is None:
            return None
        return factory.validate(fix)
    except Exception:
        # InvalidRangeError, a crashing producer or a malformed descriptor
        return None
