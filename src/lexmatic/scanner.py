"""Scan loop: turns one input string into a lazy sequence of results.

Each step asks the automaton for every match anchored at the current
offset, picks the winner (longest, then first declared), lets the winning
rule's continuation extend it, then either emits a Lexeme or silently
consumes a skip match.

The sequence ends at end of input, or right after yielding a single
LexError value. Errors are yielded, not raised.

Thread Safety:
Scanner instances are single-use and owned by one consumer. All state is
instance-local; the shared DFA and RuleSet are only read.

"""

from __future__ import annotations

from enum import Enum, auto

from lexmatic.automaton import DFA
from lexmatic.continuation import extend
from lexmatic.disambiguate import select
from lexmatic.errors import ContinuationRefusedError, LexError, UnrecognizedInputError
from lexmatic.rules import RuleSet
from lexmatic.tokens import Lexeme, LexResult, Token
from lexmatic.utils.logger import get_logger

logger = get_logger(__name__)


class ScanState(Enum):
    """Scanner states.

    - SCANNING: More input may produce results
    - DONE: Input fully consumed, nothing more to yield
    - FAILED: A LexError was yielded; nothing more to yield

    """

    SCANNING = auto()
    DONE = auto()
    FAILED = auto()


class Scanner:
    """Pull-based iterator of LexResult over one input string.

    Usage:
            >>> for result in lexer.lex("import foo;"):
            ...     print(result)
        Lexeme(start=0, end=6, token=Token(Import))
        Lexeme(start=7, end=10, token=Token(Ident, 'foo'))
        Lexeme(start=10, end=11, token=Token(Semi))

    """

    __slots__ = (
        "_dfa",
        "_rules",
        "_tokens",  # Prebuilt Token per non-capturing rule, None otherwise
        "_source",
        "_source_len",
        "_pos",
        "_state",
    )

    def __init__(
        self,
        dfa: DFA,
        rules: RuleSet,
        tokens: tuple[Token | None, ...],
        source: str,
        start: int = 0,
    ) -> None:
        self._dfa = dfa
        self._rules = rules
        self._tokens = tokens
        self._source = source
        self._source_len = len(source)
        self._pos = start
        self._state = ScanState.SCANNING

    @property
    def offset(self) -> int:
        """Offset where the next step will start matching."""
        return self._pos

    @property
    def state(self) -> ScanState:
        return self._state

    def __iter__(self) -> Scanner:
        return self

    def __next__(self) -> LexResult:
        if self._state is not ScanState.SCANNING:
            raise StopIteration

        source = self._source
        while self._pos < self._source_len:
            start = self._pos
            winner = select(self._dfa.matches_at(source, start))
            if winner is None:
                return self._fail(UnrecognizedInputError(start))

            rule = self._rules[winner.rule_id]
            try:
                end = extend(rule, source, start, winner.end)
            except ContinuationRefusedError as exc:
                return self._fail(exc)
            except Exception:
                # Broken continuation contract; the scan cannot resume past it
                self._state = ScanState.FAILED
                raise
            assert end > start, "empty-matching patterns are rejected at build time"

            self._pos = end
            if rule.is_skip:
                continue
            token = self._tokens[rule.id]
            if token is None:
                token = Token(rule.name, source[start:end])
            return Lexeme(start, end, token)

        self._state = ScanState.DONE
        raise StopIteration

    def _fail(self, error: LexError) -> LexError:
        self._state = ScanState.FAILED
        logger.debug("Scan stopped with %r", error)
        return error

    def __repr__(self) -> str:
        return f"Scanner(offset={self._pos}, state={self._state.name})"
