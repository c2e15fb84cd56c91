"""Content-addressed automaton cache for lexmatic.

Building a DFA is the expensive part of constructing a Lexer. The DFA
depends only on the rule patterns (in order) and the config fields that
shape it, so a (rules, config) hash identifies it. Continuations, rule
kinds and capture flags never reach the automaton and are not hashed.

Thread Safety:
    DictAutomatonCache is not thread-safe. For parallel builds, use a cache
    implementation with internal locking (e.g. threading.Lock around get/put).
    Cached DFAs are immutable and safe to share.

Example:
    >>> cache = DictAutomatonCache()
    >>> first = Lexer(rules, cache=cache)
    >>> second = Lexer(rules, cache=cache)  # Cache hit, no rebuild
    >>> first.automaton is second.automaton
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from lexmatic.utils.hashing import hash_str

if TYPE_CHECKING:
    from lexmatic.automaton import DFA
    from lexmatic.config import LexerConfig
    from lexmatic.rules import RuleSet


class AutomatonCache(Protocol):
    """Protocol for content-addressed automaton caches."""

    def get(self, key: str) -> DFA | None:
        """Return cached DFA if present, else None."""
        ...

    def put(self, key: str, dfa: DFA) -> None:
        """Store DFA in cache."""
        ...


class DictAutomatonCache:
    """In-memory automaton cache using a dict.

    Not thread-safe. For parallel builds, wrap with a lock or use a
    thread-safe implementation.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, DFA] = {}

    def get(self, key: str) -> DFA | None:
        """Return cached DFA if present, else None."""
        return self._data.get(key)

    def put(self, key: str, dfa: DFA) -> None:
        """Store DFA in cache."""
        self._data[key] = dfa

    def __len__(self) -> int:
        return len(self._data)


def hash_rules(rules: RuleSet, config: LexerConfig) -> str:
    """Compute the cache key for building rules under config.

    Args:
        rules: Ordered rule set
        config: Build configuration

    Returns:
        Hex digest of SHA256 hash
    """
    parts = [
        str(config.minimize),
        str(config.max_dfa_states),
        str(config.dot_matches_newline),
        str(config.case_insensitive),
    ]
    # Pattern sources in id order; repr keeps separators unambiguous
    parts.extend(repr(rule.pattern.source) for rule in rules)
    return hash_str("|".join(parts))


__all__ = [
    "AutomatonCache",
    "DictAutomatonCache",
    "hash_rules",
]
