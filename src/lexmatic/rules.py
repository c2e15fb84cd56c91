"""Rule declarations consumed by the automaton builder.

A RuleSet is the ordered, validated rule list. Declaration order is the
only priority key: a rule's id is its index in the set.

Thread Safety:
Rule and RuleSet are immutable after creation. Safe to share.
Use RuleSetBuilder for incremental construction.

Example:
    >>> rules = (
    ...     RuleSetBuilder()
    ...     .token("Import", "import")
    ...     .token("Semi", ";")
    ...     .regex("Ident", r"[a-zA-Z_][a-zA-Z0-9_]*", capture=True)
    ...     .skip(r"[ \\t\\r\\n\\f]+")
    ...     .build()
    ... )
    >>> [rule.name for rule in rules]
    ['Import', 'Semi', 'Ident', '_skip0']
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum, auto

from lexmatic.errors import RuleError
from lexmatic.regex.parser import escape

# (matched_text, remaining_text) -> extra length to consume, or None to refuse
Continuation = Callable[[str, str], "int | None"]


class RuleKind(Enum):
    """What the scan loop does with a winning rule."""

    TOKEN = auto()  # Emitted as a Lexeme
    SKIP = auto()  # Consumed silently


@dataclass(frozen=True, slots=True)
class Literal:
    """Pattern matching exactly one string."""

    text: str

    @property
    def source(self) -> str:
        """Equivalent regex source with every metacharacter escaped."""
        return escape(self.text)


@dataclass(frozen=True, slots=True)
class Regex:
    """Pattern in lexmatic regex syntax."""

    pattern: str

    @property
    def source(self) -> str:
        return self.pattern


Pattern = Literal | Regex


@dataclass(frozen=True, slots=True)
class Rule:
    """One token or skip rule.

    Attributes:
        name: Token type reported for matches of this rule
        pattern: Literal or Regex to match
        kind: TOKEN (emitted) or SKIP (discarded)
        continuation: Optional callback extending a match past the automaton
        capture: Whether emitted tokens carry the matched text
        id: Declaration index, assigned by RuleSet (-1 until then)

    """

    name: str
    pattern: Pattern
    kind: RuleKind = RuleKind.TOKEN
    continuation: Continuation | None = None
    capture: bool = False
    id: int = -1

    @property
    def is_skip(self) -> bool:
        return self.kind is RuleKind.SKIP


class RuleSet:
    """Immutable, ordered rule list with dense ids.

    Rules keep the order they were given in; each is re-stamped with its
    index as id.

    Raises:
        RuleError: If the list is empty, contains non-Rule entries or
            entries with an unknown kind, or repeats a rule name
    """

    __slots__ = ("_rules", "_by_name")

    def __init__(self, rules: Iterable[Rule]) -> None:
        stamped: list[Rule] = []
        by_name: dict[str, Rule] = {}
        for index, rule in enumerate(rules):
            if not isinstance(rule, Rule):
                msg = f"Expected Rule at index {index}, got {type(rule).__name__}"
                raise RuleError(msg)
            if not isinstance(rule.pattern, (Literal, Regex)):
                msg = f"Rule '{rule.name}' has unsupported pattern {rule.pattern!r}"
                raise RuleError(msg)
            if not rule.name:
                msg = f"Rule at index {index} has an empty name"
                raise RuleError(msg)
            if rule.name in by_name:
                msg = f"Rule '{rule.name}' declared more than once"
                raise RuleError(msg)
            if not isinstance(rule.kind, RuleKind):
                msg = f"Rule '{rule.name}' has kind {rule.kind!r}, expected a RuleKind"
                raise RuleError(msg)
            if rule.continuation is not None and not callable(rule.continuation):
                msg = f"Rule '{rule.name}' continuation is not callable"
                raise RuleError(msg)
            rule = replace(rule, id=index)
            stamped.append(rule)
            by_name[rule.name] = rule
        if not stamped:
            raise RuleError("A lexer needs at least one rule")
        self._rules = tuple(stamped)
        self._by_name = by_name

    def get(self, name: str) -> Rule | None:
        """Get rule by name, or None if not declared."""
        return self._by_name.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        """Rule names in declaration order."""
        return tuple(rule.name for rule in self._rules)

    def __getitem__(self, rule_id: int) -> Rule:
        return self._rules[rule_id]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"RuleSet({list(self.names)!r})"


class RuleSetBuilder:
    """Mutable builder for RuleSet.

    Token rules keep their declaration order. Skip rules are placed after
    every token rule, so a token rule always wins a same-length tie
    against a skip rule.

    Example:
        >>> builder = RuleSetBuilder().token("Semi", ";").skip(r"\\s+")
        >>> rules = builder.build()
    """

    __slots__ = ("_tokens", "_skips")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._tokens: list[Rule] = []
        self._skips: list[Rule] = []

    def token(self, name: str, text: str) -> RuleSetBuilder:
        """Declare a rule matching exactly text.

        Returns:
            Self for chaining
        """
        self._tokens.append(Rule(name, Literal(text)))
        return self

    def regex(
        self,
        name: str,
        pattern: str,
        *,
        capture: bool = False,
        more: Continuation | None = None,
    ) -> RuleSetBuilder:
        """Declare a rule matching a regex.

        Args:
            name: Token type name
            pattern: Regex source
            capture: Carry the matched text on emitted tokens
            more: Continuation callback extending each match

        Returns:
            Self for chaining
        """
        self._tokens.append(
            Rule(name, Regex(pattern), continuation=more, capture=capture)
        )
        return self

    def skip(self, pattern: str, *, name: str | None = None) -> RuleSetBuilder:
        """Declare a regex whose matches are consumed and discarded.

        Returns:
            Self for chaining
        """
        if name is None:
            name = f"_skip{len(self._skips)}"
        self._skips.append(Rule(name, Regex(pattern), kind=RuleKind.SKIP))
        return self

    def build(self) -> RuleSet:
        """Build immutable RuleSet from declared rules."""
        return RuleSet([*self._tokens, *self._skips])

    def __len__(self) -> int:
        """Number of declared rules."""
        return len(self._tokens) + len(self._skips)
