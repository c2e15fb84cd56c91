"""
lexmatic: longest-match lexer engine built on one combined DFA.

Declare an ordered list of token and skip rules (literal strings or
regexes, optionally with a continuation callback for non-regular tokens),
build a Lexer once, and scan any number of strings with it, from any
number of threads.

Quick Start:
    >>> from lexmatic import Lexer, RuleSetBuilder
    >>> rules = (
    ...     RuleSetBuilder()
    ...     .token("Import", "import")
    ...     .token("Semi", ";")
    ...     .regex("Ident", r"[a-zA-Z_][a-zA-Z0-9_]*", capture=True)
    ...     .skip(r"//[^\\n]*")
    ...     .skip(r"[ \\t\\r\\n\\f]+")
    ...     .build()
    ... )
    >>> lexer = Lexer(rules)
    >>> for result in lexer.lex("import foo_bar;"):
    ...     print(result)
    Lexeme(start=0, end=6, token=Token(Import))
    Lexeme(start=7, end=14, token=Token(Ident, 'foo_bar'))
    Lexeme(start=14, end=15, token=Token(Semi))

Errors:
    Scans never raise lexical errors. A scan that cannot continue yields a
    LexError value (UnrecognizedInputError or ContinuationRefusedError) as
    its last item. Lexer.tokenize() raises it instead.

Installation:
    pip install lexmatic              # Zero runtime dependencies
"""

from lexmatic.cache import AutomatonCache, DictAutomatonCache, hash_rules
from lexmatic.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from lexmatic.errors import (
    ContinuationRefusedError,
    LexError,
    LexmaticError,
    PatternError,
    RuleError,
    UnrecognizedInputError,
)
from lexmatic.lexer import Lexer
from lexmatic.location import SourceLocation
from lexmatic.rules import (
    Continuation,
    Literal,
    Regex,
    Rule,
    RuleKind,
    RuleSet,
    RuleSetBuilder,
)
from lexmatic.scanner import Scanner, ScanState
from lexmatic.tokens import Lexeme, LexResult, MatchCandidate, Token

__version__ = "0.1.0"

__all__ = [
    # Engine
    "Lexer",
    "Scanner",
    "ScanState",
    # Rules
    "Continuation",
    "Literal",
    "Regex",
    "Rule",
    "RuleKind",
    "RuleSet",
    "RuleSetBuilder",
    # Results
    "LexResult",
    "Lexeme",
    "MatchCandidate",
    "Token",
    "SourceLocation",
    # Errors
    "ContinuationRefusedError",
    "LexError",
    "LexmaticError",
    "PatternError",
    "RuleError",
    "UnrecognizedInputError",
    # Configuration
    "LexerConfig",
    "get_lexer_config",
    "lexer_config_context",
    "reset_lexer_config",
    "set_lexer_config",
    # Cache
    "AutomatonCache",
    "DictAutomatonCache",
    "hash_rules",
    # Version
    "__version__",
]
