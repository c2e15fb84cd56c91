"""Anchored multi-pattern DFA.

Built once from the combined NFA by subset construction. Each DFA state
records every rule id accepted there, so a single left-to-right walk from
a scan position reports every (rule, length) match at once.

Input characters are mapped to equivalence classes: the code-point line is
cut at every boundary of every character set in the NFA, so all characters
within one class behave identically in every state.

Thread Safety:
DFA is immutable after construction. Safe to share across threads and
scans; the walk keeps its state in local variables only.

"""

from __future__ import annotations

from bisect import bisect_right
from collections import deque

from lexmatic.automaton.nfa import NFA
from lexmatic.errors import PatternError
from lexmatic.regex.charset import MAX_CODEPOINT
from lexmatic.tokens import MatchCandidate

DEAD = -1


class DFA:
    """Immutable anchored DFA over character equivalence classes.

    Use build_dfa() to create instances.
    """

    __slots__ = ("_starts", "_ascii", "_table", "_accepts", "_start")

    def __init__(
        self,
        starts: tuple[int, ...],
        table: tuple[tuple[int, ...], ...],
        accepts: tuple[tuple[int, ...], ...],
        start: int,
    ) -> None:
        """Initialize DFA with pre-built tables.

        Args:
            starts: First code point of each character class, ascending from 0
            table: table[state][class] -> next state or DEAD
            accepts: Rule ids accepted in each state, ascending
            start: Initial state
        """
        self._starts = starts
        self._table = table
        self._accepts = accepts
        self._start = start
        # Class lookup for ASCII skips the bisect
        self._ascii = tuple(bisect_right(starts, cp) - 1 for cp in range(128))

    @property
    def state_count(self) -> int:
        return len(self._table)

    @property
    def class_count(self) -> int:
        return len(self._starts)

    @property
    def start(self) -> int:
        return self._start

    def classify(self, char: str) -> int:
        """Equivalence class of a single character."""
        cp = ord(char)
        if cp < 128:
            return self._ascii[cp]
        return bisect_right(self._starts, cp) - 1

    def next_state(self, state: int, char: str) -> int:
        return self._table[state][self.classify(char)]

    def accepts(self, state: int) -> tuple[int, ...]:
        """Rule ids whose pattern matches upon reaching state."""
        return self._accepts[state]

    def matches_at(self, text: str, pos: int) -> list[MatchCandidate]:
        """Every (rule id, end) match anchored at pos.

        Walks text from pos until the automaton dies or input ends.
        Candidates are ordered by end offset, then rule id.
        """
        table = self._table
        accepts = self._accepts
        ascii_classes = self._ascii
        starts = self._starts
        state = self._start
        found: list[MatchCandidate] = []
        for index in range(pos, len(text)):
            cp = ord(text[index])
            cls = ascii_classes[cp] if cp < 128 else bisect_right(starts, cp) - 1
            state = table[state][cls]
            if state == DEAD:
                break
            for rule_id in accepts[state]:
                found.append(MatchCandidate(end=index + 1, rule_id=rule_id))
        return found

    def __repr__(self) -> str:
        return f"DFA(states={self.state_count}, classes={self.class_count})"


def build_dfa(nfa: NFA, *, minimize: bool = True, max_states: int = 10_000) -> DFA:
    """Determinize nfa into an anchored DFA.

    Args:
        nfa: Combined multi-rule NFA
        minimize: Merge equivalent states after construction
        max_states: Fail when subset construction exceeds this many states

    Raises:
        PatternError: If the state limit is exceeded
    """
    starts, edge_classes = _partition_alphabet(nfa)
    table, accepts = _determinize(nfa, len(starts), edge_classes, max_states)
    table = _prune_dead(table, accepts)
    table, accepts, start = _compact(table, accepts, 0)
    if minimize:
        table, accepts, start = _minimize(table, accepts, start)
    return DFA(
        starts=starts,
        table=tuple(tuple(row) for row in table),
        accepts=tuple(accepts),
        start=start,
    )


def _partition_alphabet(
    nfa: NFA,
) -> tuple[tuple[int, ...], list[list[tuple[tuple[int, ...], int]]]]:
    """Cut the code-point line into classes and map each edge to its classes."""
    boundaries = {0}
    for state in nfa.states:
        for chars, _ in state.edges:
            for lo, hi in chars.ranges:
                boundaries.add(lo)
                if hi < MAX_CODEPOINT:
                    boundaries.add(hi + 1)
    starts = tuple(sorted(boundaries))
    index_of = {cp: i for i, cp in enumerate(starts)}

    edge_classes: list[list[tuple[tuple[int, ...], int]]] = []
    for state in nfa.states:
        edges = []
        for chars, target in state.edges:
            classes: list[int] = []
            for lo, hi in chars.ranges:
                last = index_of[hi + 1] if hi < MAX_CODEPOINT else len(starts)
                classes.extend(range(index_of[lo], last))
            edges.append((tuple(classes), target))
        edge_classes.append(edges)
    return starts, edge_classes


def _determinize(
    nfa: NFA,
    class_count: int,
    edge_classes: list[list[tuple[tuple[int, ...], int]]],
    max_states: int,
) -> tuple[list[list[int]], list[tuple[int, ...]]]:
    """Subset construction; state 0 is the start state."""
    start_set = nfa.closure({nfa.start})
    ids: dict[frozenset[int], int] = {start_set: 0}
    pending: deque[frozenset[int]] = deque([start_set])
    table: list[list[int]] = []
    accepts: list[tuple[int, ...]] = []

    while pending:
        current = pending.popleft()
        moves: dict[int, set[int]] = {}
        for nfa_state in current:
            for classes, target in edge_classes[nfa_state]:
                for cls in classes:
                    moves.setdefault(cls, set()).add(target)

        row = [DEAD] * class_count
        closures: dict[frozenset[int], int] = {}
        for cls, targets in moves.items():
            key = frozenset(targets)
            if key not in closures:
                closed = nfa.closure(key)
                if closed not in ids:
                    if len(ids) >= max_states:
                        msg = f"automaton exceeds {max_states} DFA states"
                        raise PatternError(msg)
                    ids[closed] = len(ids)
                    pending.append(closed)
                closures[key] = ids[closed]
            row[cls] = closures[key]

        table.append(row)
        rules = {nfa.states[s].accept for s in current} - {None}
        accepts.append(tuple(sorted(rules)))
    return table, accepts


def _prune_dead(
    table: list[list[int]], accepts: list[tuple[int, ...]]
) -> list[list[int]]:
    """Redirect transitions into states that can never accept to DEAD.

    The walk in DFA.matches_at then stops as soon as no further match is
    possible instead of reading to the end of input.
    """
    reverse: list[list[int]] = [[] for _ in table]
    for source, row in enumerate(table):
        for target in set(row):
            if target != DEAD:
                reverse[target].append(source)

    live = {state for state, rules in enumerate(accepts) if rules}
    stack = list(live)
    while stack:
        for source in reverse[stack.pop()]:
            if source not in live:
                live.add(source)
                stack.append(source)

    return [[t if t in live else DEAD for t in row] for row in table]


def _compact(
    table: list[list[int]], accepts: list[tuple[int, ...]], start: int
) -> tuple[list[list[int]], list[tuple[int, ...]], int]:
    """Drop states unreachable from start and renumber in BFS order."""
    order = [start]
    new_id = {start: 0}
    queue = deque([start])
    while queue:
        for target in table[queue.popleft()]:
            if target != DEAD and target not in new_id:
                new_id[target] = len(order)
                order.append(target)
                queue.append(target)
    new_table = [
        [new_id[t] if t != DEAD else DEAD for t in table[old]] for old in order
    ]
    new_accepts = [accepts[old] for old in order]
    return new_table, new_accepts, 0


def _minimize(
    table: list[list[int]], accepts: list[tuple[int, ...]], start: int
) -> tuple[list[list[int]], list[tuple[int, ...]], int]:
    """Moore partition refinement.

    States start grouped by their exact accepted rule set, so merging never
    changes which rules match at which length.
    """
    labels: dict[tuple[int, ...], int] = {}
    block = [labels.setdefault(rules, len(labels)) for rules in accepts]
    block_count = len(labels)

    while True:
        signatures: dict[tuple[int, ...], int] = {}
        refined = []
        for state, row in enumerate(table):
            signature = (block[state], *(block[t] if t != DEAD else DEAD for t in row))
            refined.append(signatures.setdefault(signature, len(signatures)))
        if len(signatures) == block_count:
            break
        block, block_count = refined, len(signatures)

    # Representative row per block, numbered from the start state's block
    table_out: list[list[int]] = []
    accepts_out: list[tuple[int, ...]] = []
    renumber: dict[int, int] = {}
    queue = deque([start])
    renumber[block[start]] = 0
    representatives = {}
    for state in range(len(table)):
        representatives.setdefault(block[state], state)
    while queue:
        state = queue.popleft()
        row = []
        for target in table[state]:
            if target == DEAD:
                row.append(DEAD)
                continue
            target_block = block[target]
            if target_block not in renumber:
                renumber[target_block] = len(renumber)
                queue.append(representatives[target_block])
            row.append(renumber[target_block])
        table_out.append(row)
        accepts_out.append(accepts[state])
    return table_out, accepts_out, 0
