"""Scan result types for the lexmatic engine.

A scan produces a sequence of Lexeme values, optionally terminated by a
LexError value. Each Lexeme carries a Token: the rule name plus, for
capturing rules, the exact matched text.

Thread Safety:
All types here are immutable and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from lexmatic.errors import LexError


@dataclass(frozen=True, slots=True)
class Token:
    """Payload for a matched non-skip rule.

    Attributes:
        type: Name of the winning rule
        value: Matched text for capturing rules, None otherwise

    """

    type: str
    value: str | None = None

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.value is None:
            return f"Token({self.type})"
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type}, {val!r})"


class Lexeme(NamedTuple):
    """A successfully scanned token and its [start, end) span."""

    start: int
    end: int
    token: Token


@dataclass(frozen=True, slots=True, order=True)
class MatchCandidate:
    """A rule whose pattern matches input[pos:end] at one scan position.

    Ordering is (end, rule_id), the order the automaton reports them in.
    """

    end: int
    rule_id: int


LexResult = Lexeme | LexError

__all__ = ["LexResult", "Lexeme", "MatchCandidate", "Token"]
