"""Code-point interval sets.

A CharSet is an immutable, normalized tuple of disjoint inclusive
(lo, hi) code-point ranges, sorted ascending with no two ranges adjacent.
Negation is taken against the full Unicode range.

Example:
    >>> CharSet.from_ranges([(ord("a"), ord("z")), (ord("0"), ord("9"))])
    CharSet('0'-'9', 'a'-'z')
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

MAX_CODEPOINT = 0x10FFFF


@dataclass(frozen=True, slots=True)
class CharSet:
    """Immutable set of code points stored as sorted disjoint ranges."""

    ranges: tuple[tuple[int, int], ...] = ()

    @classmethod
    def from_ranges(cls, ranges: Iterable[tuple[int, int]]) -> CharSet:
        """Build a normalized set from arbitrary (possibly overlapping) ranges."""
        merged: list[list[int]] = []
        for lo, hi in sorted(ranges):
            if merged and lo <= merged[-1][1] + 1:
                if hi > merged[-1][1]:
                    merged[-1][1] = hi
            else:
                merged.append([lo, hi])
        return cls(tuple((lo, hi) for lo, hi in merged))

    @classmethod
    def of(cls, *chars: str) -> CharSet:
        """Set containing exactly the given characters."""
        return cls.from_ranges((ord(c), ord(c)) for c in chars)

    @classmethod
    def span(cls, lo: str, hi: str) -> CharSet:
        return cls(((ord(lo), ord(hi)),))

    def union(self, *others: CharSet) -> CharSet:
        ranges = list(self.ranges)
        for other in others:
            ranges.extend(other.ranges)
        return CharSet.from_ranges(ranges)

    def negate(self) -> CharSet:
        """Complement against [0, MAX_CODEPOINT]."""
        result: list[tuple[int, int]] = []
        next_lo = 0
        for lo, hi in self.ranges:
            if lo > next_lo:
                result.append((next_lo, lo - 1))
            next_lo = hi + 1
        if next_lo <= MAX_CODEPOINT:
            result.append((next_lo, MAX_CODEPOINT))
        return CharSet(tuple(result))

    def case_folded(self) -> CharSet:
        """Add the other ASCII case of every letter in the set."""
        extra: list[tuple[int, int]] = []
        for lo, hi in self.ranges:
            for base, other in ((ord("a"), ord("A")), (ord("A"), ord("a"))):
                start = max(lo, base)
                end = min(hi, base + 25)
                if start <= end:
                    extra.append((start - base + other, end - base + other))
        if not extra:
            return self
        return CharSet.from_ranges([*self.ranges, *extra])

    def is_empty(self) -> bool:
        return not self.ranges

    def __contains__(self, char: str) -> bool:
        cp = ord(char)
        return any(lo <= cp <= hi for lo, hi in self.ranges)

    def __repr__(self) -> str:
        parts = []
        for lo, hi in self.ranges:
            if lo == hi:
                parts.append(repr(chr(lo)))
            else:
                parts.append(f"{chr(lo)!r}-{chr(hi)!r}")
        return f"CharSet({', '.join(parts)})"


DIGIT = CharSet.span("0", "9")
WORD = CharSet.from_ranges(
    [(ord("0"), ord("9")), (ord("A"), ord("Z")), (ord("_"), ord("_")), (ord("a"), ord("z"))]
)
SPACE = CharSet.of(" ", "\t", "\n", "\r", "\f", "\v")
ANY = CharSet(((0, MAX_CODEPOINT),))
ANY_BUT_NEWLINE = CharSet.of("\n").negate()

# Perl-style class escapes: \d \w \s and their negations
PERL_CLASSES: dict[str, CharSet] = {
    "d": DIGIT,
    "D": DIGIT.negate(),
    "w": WORD,
    "W": WORD.negate(),
    "s": SPACE,
    "S": SPACE.negate(),
}
