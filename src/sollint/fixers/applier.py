"""Patch application: rewrite source text with accepted edits."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sollint.fixers.descriptor import FixDescriptor


class OverlapInvariantViolation(RuntimeError):
    """Raised when accepted edits overlap or are out of order."""

    def __init__(self, fix: FixDescriptor, cursor: int) -> None:
        self.fix = fix
        self.cursor = cursor
        super().__init__(
            f"Fix at [{fix.range.start}, {fix.range.end}) starts before "
            f"the end of the previous fix at offset {cursor}"
        )


@dataclass(frozen=True)
class PatchResult:
    """Result of applying edits to a source text.

    Attributes:
        changed: Whether any edit was applied.
        output: Patched text. Identical to the source when unchanged.
    """

    changed: bool
    output: str


def apply_fixes(source: str, fixes: Sequence[FixDescriptor]) -> PatchResult:
    """Apply sorted, non-overlapping edits in a single pass.

    Text between edits is copied verbatim, so every character outside an
    accepted range survives in original order.

    Args:
        source: Original source text.
        fixes: Edits sorted by range start with no overlaps.

    Returns:
        PatchResult with the patched text.

    Raises:
        OverlapInvariantViolation: If an edit starts before the end of the
            previous one.
    """
    chunks: list[str] = []
    cursor = 0

    for fix in fixes:
        if fix.range.start < cursor:
            raise OverlapInvariantViolation(fix, cursor)
        chunks.append(source[cursor : fix.range.start])
        chunks.append(fix.text)
        cursor = fix.range.end

    chunks.append(source[cursor:])
    return PatchResult(changed=bool(fixes), output="".join(chunks))
