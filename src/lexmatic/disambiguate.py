"""Longest-match, first-rule disambiguation.

At each scan position the automaton reports every rule that matches and
at which lengths. Exactly one wins:

1. The longest match wins, whatever the declaration order.
2. Among matches of that length, the rule declared first wins.

The selection is total and deterministic: the same candidates always
give the same winner, and no candidates means no match.

"""

from __future__ import annotations

from collections.abc import Iterable

from lexmatic.tokens import MatchCandidate


def select(candidates: Iterable[MatchCandidate]) -> MatchCandidate | None:
    """Pick the winning candidate, or None if there are none.

    Example:
        >>> select([MatchCandidate(6, 0), MatchCandidate(7, 2)])
        MatchCandidate(end=7, rule_id=2)
    """
    best: MatchCandidate | None = None
    for candidate in candidates:
        if (
            best is None
            or candidate.end > best.end
            or (candidate.end == best.end and candidate.rule_id < best.rule_id)
        ):
            best = candidate
    return best
