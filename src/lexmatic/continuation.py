"""Continuation dispatch for rules that extend their automaton match.

Some tokens are not regular (raw strings with a variable-length closing
delimiter, nested comments). Such a rule matches only its opening with a
regex and names a continuation that finds the real end:

    continuation(matched_text, remaining_text) -> int | None

An int is how many more characters of remaining_text belong to the token.
It is trusted as-is: the automaton never re-checks the extended region.
None rejects the whole token, reported at the offset where it began.
"""

from __future__ import annotations

from lexmatic.errors import ContinuationRefusedError
from lexmatic.rules import Rule


def extend(rule: Rule, source: str, start: int, end: int) -> int:
    """Return the final end offset of rule's match source[start:end].

    Rules without a continuation keep end unchanged.

    Raises:
        ContinuationRefusedError: If the continuation returns None
        TypeError: If the continuation returns something other than int or None
        ValueError: If the returned count is negative or runs past the input
    """
    more = rule.continuation
    if more is None:
        return end
    extra = more(source[start:end], source[end:])
    if extra is None:
        raise ContinuationRefusedError(start, rule.name)
    if isinstance(extra, bool) or not isinstance(extra, int):
        msg = f"Continuation for rule '{rule.name}' returned {type(extra).__name__}, expected int or None"
        raise TypeError(msg)
    remaining = len(source) - end
    if not 0 <= extra <= remaining:
        msg = (
            f"Continuation for rule '{rule.name}' returned {extra}, "
            f"outside 0..{remaining} remaining characters"
        )
        raise ValueError(msg)
    return end + extra
