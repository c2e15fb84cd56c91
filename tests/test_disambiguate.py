"""Tests for winner selection among match candidates."""

from hypothesis import given
from hypothesis import strategies as st

from lexmatic.disambiguate import select
from lexmatic.tokens import MatchCandidate

candidates = st.lists(
    st.builds(MatchCandidate, st.integers(1, 50), st.integers(0, 10)),
    max_size=20,
)


class TestSelect:
    """Longest match first, then earliest rule."""

    def test_no_candidates(self) -> None:
        assert select([]) is None

    def test_longest_wins_over_earlier_rule(self) -> None:
        assert select([MatchCandidate(6, 0), MatchCandidate(7, 2)]) == MatchCandidate(7, 2)

    def test_earliest_rule_breaks_ties(self) -> None:
        assert select([MatchCandidate(6, 3), MatchCandidate(6, 1)]) == MatchCandidate(6, 1)

    def test_accepts_generators(self) -> None:
        assert select(MatchCandidate(n, 0) for n in (1, 3, 2)) == MatchCandidate(3, 0)

    @given(candidates)
    def test_order_independent(self, items: list[MatchCandidate]) -> None:
        assert select(items) == select(list(reversed(items)))

    @given(candidates)
    def test_matches_sort_order(self, items: list[MatchCandidate]) -> None:
        expected = min(items, key=lambda c: (-c.end, c.rule_id)) if items else None
        assert select(items) == expected
