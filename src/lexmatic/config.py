"""ContextVar-based build configuration for lexmatic.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Lexer captures the active config once, at build time; later changes to
the context never affect an already-built engine.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    lexer = Lexer(rules, config=LexerConfig(case_insensitive=True))

    # Or use the context manager
    with lexer_config_context(LexerConfig(dot_matches_newline=True)):
        lexer = Lexer(rules)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable automaton build configuration.

    Attributes:
        minimize: Run DFA minimization after subset construction
        max_dfa_states: Upper bound on DFA states; larger builds fail
        dot_matches_newline: Let ``.`` match ``\\n``
        case_insensitive: Fold ASCII letter case in every pattern

    """

    minimize: bool = True
    max_dfa_states: int = 10_000
    dot_matches_newline: bool = False
    case_insensitive: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LexerConfig":
        """Create LexerConfig from dictionary.

        Only includes keys that are valid LexerConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                LexerConfig attribute names.

        Returns:
            New LexerConfig instance with values from dict.

        Example:
            >>> config = LexerConfig.from_dict({
            ...     "case_insensitive": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.case_insensitive
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (thread-local).

    Returns:
        The active LexerConfig for this thread/context.

    """
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context.

    Args:
        config: LexerConfig instance to use for this context.

    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: LexerConfig to use within the context.

    Yields:
        None

    Example:
        >>> with lexer_config_context(LexerConfig(case_insensitive=True)):
        ...     lexer = Lexer(rules)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
