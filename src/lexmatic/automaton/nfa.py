"""Thompson construction of a multi-rule NFA.

Every rule's syntax tree becomes a fragment whose final state accepts that
rule's id. The NFA start state has an epsilon edge to each fragment start,
so one traversal explores all rules at once.

Thread Safety:
NFABuilder is single-use and not thread-safe. A built NFA is only read
by the DFA construction and then discarded.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from lexmatic.errors import PatternError
from lexmatic.regex.charset import CharSet
from lexmatic.regex.nodes import Alternate, CharClass, Concat, Empty, Node, Repeat

# Counted repetition is expanded, so nested counts multiply
MAX_NFA_STATES = 250_000


@dataclass(slots=True)
class NFAState:
    """One NFA state.

    Attributes:
        edges: (character set, target) transitions
        epsilons: Targets reachable without consuming input
        accept: Rule id accepted in this state, or None

    """

    edges: list[tuple[CharSet, int]] = field(default_factory=list)
    epsilons: list[int] = field(default_factory=list)
    accept: int | None = None


@dataclass(frozen=True, slots=True)
class NFA:
    """A built NFA: states indexed by position, plus the shared start state."""

    states: tuple[NFAState, ...]
    start: int

    def closure(self, seeds: set[int] | frozenset[int]) -> frozenset[int]:
        """Epsilon closure of a set of states."""
        seen = set(seeds)
        stack = list(seeds)
        states = self.states
        while stack:
            for target in states[stack.pop()].epsilons:
                if target not in seen:
                    seen.add(target)
                    stack.append(target)
        return frozenset(seen)


class NFABuilder:
    """Incrementally builds one NFA from per-rule syntax trees.

    Example:
        >>> builder = NFABuilder()
        >>> builder.add_rule(0, parse_regex("ab"))
        >>> nfa = builder.build()
    """

    __slots__ = ("_states", "_rule_starts")

    def __init__(self) -> None:
        self._states: list[NFAState] = []
        self._rule_starts: list[int] = []

    def add_rule(self, rule_id: int, node: Node) -> None:
        """Add a fragment for node whose final state accepts rule_id."""
        start, end = self._fragment(node)
        self._states[end].accept = rule_id
        self._rule_starts.append(start)

    def build(self) -> NFA:
        start = self._new_state()
        self._states[start].epsilons.extend(self._rule_starts)
        return NFA(states=tuple(self._states), start=start)

    def __len__(self) -> int:
        """Number of states created so far."""
        return len(self._states)

    def _new_state(self) -> int:
        if len(self._states) >= MAX_NFA_STATES:
            msg = f"pattern expands to more than {MAX_NFA_STATES} NFA states"
            raise PatternError(msg)
        self._states.append(NFAState())
        return len(self._states) - 1

    def _epsilon(self, source: int, target: int) -> None:
        self._states[source].epsilons.append(target)

    def _fragment(self, node: Node) -> tuple[int, int]:
        """Build states for node; return its (start, end) pair."""
        if isinstance(node, CharClass):
            start, end = self._new_state(), self._new_state()
            self._states[start].edges.append((node.chars, end))
            return start, end

        if isinstance(node, Concat):
            start, end = self._fragment(node.parts[0])
            for part in node.parts[1:]:
                part_start, part_end = self._fragment(part)
                self._epsilon(end, part_start)
                end = part_end
            return start, end

        if isinstance(node, Alternate):
            start, end = self._new_state(), self._new_state()
            for option in node.options:
                option_start, option_end = self._fragment(option)
                self._epsilon(start, option_start)
                self._epsilon(option_end, end)
            return start, end

        if isinstance(node, Repeat):
            return self._repeat(node)

        if isinstance(node, Empty):
            start, end = self._new_state(), self._new_state()
            self._epsilon(start, end)
            return start, end

        raise TypeError(f"Unknown regex node {node!r}")

    def _repeat(self, node: Repeat) -> tuple[int, int]:
        start = self._new_state()
        current = start
        for _ in range(node.min_count):
            child_start, child_end = self._fragment(node.child)
            self._epsilon(current, child_start)
            current = child_end

        end = self._new_state()
        if node.max_count is None:
            hub = self._new_state()
            child_start, child_end = self._fragment(node.child)
            self._epsilon(current, hub)
            self._epsilon(hub, child_start)
            self._epsilon(child_end, hub)
            self._epsilon(hub, end)
            return start, end

        for _ in range(node.max_count - node.min_count):
            child_start, child_end = self._fragment(node.child)
            self._epsilon(current, child_start)
            self._epsilon(current, end)
            current = child_end
        self._epsilon(current, end)
        return start, end
