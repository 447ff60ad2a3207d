"""Text edit primitives for the autofix pipeline.

A FixDescriptor is a single replacement of a half-open range of the
original source text. Rules never build descriptors by hand; they receive
a FixDescriptorFactory bound to the source length and call one of its
four operations, each of which validates the range before returning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class InvalidRangeError(ValueError):
    """Raised when a fix range falls outside the source text."""

    def __init__(self, start: int, end: int, length: int) -> None:
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Invalid fix range [{start}, {end}) for source of length {length}"
        )


@dataclass(frozen=True)
class Range:
    """Half-open offset interval ``[start, end)`` into the source text.

    Attributes:
        start: Offset of the first character covered.
        end: Offset one past the last character covered.
    """

    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)


RangeLike = Union[Range, tuple[int, int]]


def as_range(value: RangeLike) -> Range:
    """Coerce a ``(start, end)`` pair into a Range."""
    if isinstance(value, Range):
        return value
    start, end = value
    return Range(start, end)


@dataclass(frozen=True)
class FixDescriptor:
    """A concrete text edit derived from one diagnostic.

    Attributes:
        range: Span of the original source that is replaced.
        text: Replacement text. Empty for deletions; the span is empty
            for insertions.
    """

    range: Range
    text: str

    @property
    def delta(self) -> int:
        """Change in source length caused by this edit."""
        return len(self.text) - len(self.range)


@dataclass(frozen=True)
class FixDescriptorFactory:
    """Builds validated FixDescriptors for a source of a given length.

    This is the only capability handed to fix producers. Its operation set
    is closed: ``replace_range``, ``insert_before``, ``insert_after`` and
    ``remove``. Every operation checks ``0 <= start <= end <= length`` and
    raises InvalidRangeError otherwise.

    Attributes:
        source_length: Length of the source text the fixes apply to.
    """

    source_length: int

    @classmethod
    def for_source(cls, source: str) -> FixDescriptorFactory:
        return cls(len(source))

    def validate(self, fix: FixDescriptor) -> FixDescriptor:
        """Check a descriptor against the source bounds.

        Args:
            fix: Descriptor to check.

        Returns:
            The same descriptor when it is in bounds.

        Raises:
            InvalidRangeError: If the range is out of bounds or reversed.
        """
        self._check(fix.range)
        return fix

    def replace_range(self, range: RangeLike, text: str) -> FixDescriptor:
        """Replace the text covered by ``range`` with ``text``."""
        checked = self._check(as_range(range))
        return FixDescriptor(checked, text)

    def insert_before(self, range: RangeLike, text: str) -> FixDescriptor:
        """Insert ``text`` at the start of ``range``."""
        checked = self._check(as_range(range))
        return FixDescriptor(Range(checked.start, checked.start), text)

    def insert_after(self, range: RangeLike, text: str) -> FixDescriptor:
        """Insert ``text`` at the end of ``range``."""
        checked = self._check(as_range(range))
        return FixDescriptor(Range(checked.end, checked.end), text)

    def remove(self, range: RangeLike) -> FixDescriptor:
        """Delete the text covered by ``range``."""
        return self.replace_range(range, "")

    def _check(self, range: Range) -> Range:
        if not 0 <= range.start <= range.end <= self.source_length:
            raise InvalidRangeError(range.start, range.end, self.source_length)
        return range
