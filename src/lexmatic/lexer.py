"""The built, immutable lexing engine.

A Lexer is constructed once from an ordered rule list. Construction
compiles and validates every pattern and builds the combined DFA; any
PatternError surfaces here, before a single character is scanned.

Thread Safety:
Lexer instances are immutable after construction. One Lexer may serve any
number of concurrent scans; each lex() call returns an independent Scanner.

"""

from __future__ import annotations

from collections.abc import Iterable

from lexmatic.automaton import DFA
from lexmatic.cache import AutomatonCache, hash_rules
from lexmatic.compiler import build_automaton
from lexmatic.config import LexerConfig, get_lexer_config
from lexmatic.errors import LexError
from lexmatic.rules import Rule, RuleSet
from lexmatic.scanner import Scanner
from lexmatic.tokens import Lexeme, Token
from lexmatic.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """Multi-rule lexer with longest-match, first-rule disambiguation.

    Usage:
            >>> rules = (
            ...     RuleSetBuilder()
            ...     .token("Import", "import")
            ...     .token("Semi", ";")
            ...     .regex("Ident", r"[a-zA-Z_][a-zA-Z0-9_]*", capture=True)
            ...     .skip(r"[ \\t\\r\\n\\f]+")
            ...     .build()
            ... )
            >>> lexer = Lexer(rules)
            >>> [(lx.start, lx.end, lx.token) for lx in lexer.tokenize("import import1;")]
        [(0, 6, Token(Import)), (7, 14, Token(Ident, 'import1')), (14, 15, Token(Semi))]

    """

    __slots__ = ("_rules", "_config", "_dfa", "_tokens")

    def __init__(
        self,
        rules: RuleSet | Iterable[Rule],
        *,
        config: LexerConfig | None = None,
        cache: AutomatonCache | None = None,
    ) -> None:
        """Build the engine.

        Args:
            rules: Ordered rules; a rule's position is its priority
            config: Build configuration (defaults to the context's config)
            cache: Optional automaton cache consulted before building

        Raises:
            RuleError: If the rule list is malformed
            PatternError: If any pattern is invalid or matches the empty string
        """
        if not isinstance(rules, RuleSet):
            rules = RuleSet(rules)
        if config is None:
            config = get_lexer_config()

        dfa: DFA | None = None
        key = ""
        if cache is not None:
            key = hash_rules(rules, config)
            dfa = cache.get(key)
            if dfa is not None:
                logger.debug("Automaton cache hit for %d rules", len(rules))
        if dfa is None:
            dfa = build_automaton(rules, config)
            if cache is not None:
                cache.put(key, dfa)

        self._rules = rules
        self._config = config
        self._dfa = dfa
        self._tokens = tuple(
            None if rule.capture else Token(rule.name) for rule in rules
        )

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def config(self) -> LexerConfig:
        return self._config

    @property
    def automaton(self) -> DFA:
        """The shared, read-only DFA."""
        return self._dfa

    def lex(self, source: str, start: int = 0) -> Scanner:
        """Scan source lazily from offset start.

        Args:
            source: Input text
            start: Offset to begin at; lets a caller resume after an error

        Returns:
            Iterator of Lexeme values, possibly ending with one LexError value
        """
        if not 0 <= start <= len(source):
            msg = f"start offset {start} outside 0..{len(source)}"
            raise ValueError(msg)
        return Scanner(self._dfa, self._rules, self._tokens, source, start)

    def tokenize(self, source: str) -> list[Lexeme]:
        """Scan all of source eagerly.

        Returns:
            Every emitted Lexeme, in order

        Raises:
            LexError: The error that ended the scan, if any
        """
        lexemes: list[Lexeme] = []
        for result in self.lex(source):
            if isinstance(result, LexError):
                raise result
            lexemes.append(result)
        return lexemes

    def __repr__(self) -> str:
        return f"Lexer(rules={len(self._rules)}, automaton={self._dfa!r})"
