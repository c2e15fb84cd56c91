"""Exception classes for lexmatic.

Build-time problems (a malformed rule list, an invalid or empty-matching
pattern) are raised while constructing a Lexer; no partial engine exists.

Run-time problems are LexError subclasses. The scan loop does not raise
them: they are yielded as the final item of a scan so the caller decides
whether to report, resynchronize, or abort.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexmatic.location import SourceLocation


class LexmaticError(Exception):
    """Base exception for all lexmatic errors.

    Subclass this for specific error categories.
    """

    pass


class RuleError(LexmaticError, ValueError):
    """Malformed rule list.

    Raised for empty rule lists, duplicate rule names, or entries that
    are not Rule instances.
    """

    pass


class PatternError(LexmaticError):
    """Invalid pattern detected while building the automaton.

    Raised for regex syntax errors, unsupported constructs, patterns that
    can match the empty string, and automata exceeding the configured
    state limit.
    """

    def __init__(
        self,
        message: str,
        pattern: str | None = None,
        position: int | None = None,
        rule: str | None = None,
    ) -> None:
        """Initialize pattern error with optional context.

        Args:
            message: Error description
            pattern: Pattern source text (optional)
            position: Index into the pattern where the problem was found
            rule: Name of the rule that owns the pattern (optional)
        """
        self.message = message
        self.pattern = pattern
        self.position = position
        self.rule = rule

        prefix = f"rule '{rule}': " if rule else ""
        suffix = ""
        if pattern is not None:
            suffix = f" in pattern {pattern!r}"
            if position is not None:
                suffix += f" at position {position}"
        super().__init__(f"{prefix}{message}{suffix}")

    def with_rule(self, rule: str) -> PatternError:
        """Return a copy of this error attributed to a rule."""
        return PatternError(self.message, self.pattern, self.position, rule)


class LexError(LexmaticError):
    """Lexical error at a specific offset in the scanned input."""

    def __init__(self, offset: int) -> None:
        self.offset = offset
        super().__init__(f"lexical error at {offset}")

    def locate(self, source: str, source_file: str | None = None) -> SourceLocation:
        """Resolve the error offset to a line/column location in source."""
        from lexmatic.location import SourceLocation

        return SourceLocation.from_offset(source, self.offset, source_file=source_file)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.args == other.args and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), self.offset))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.offset})"


class UnrecognizedInputError(LexError):
    """No rule matches any prefix of the input at the offset."""

    pass


class ContinuationRefusedError(LexError):
    """A rule matched but its continuation declined to complete the token.

    The offset is where the rejected token began, not where the
    continuation was asked to look.
    """

    def __init__(self, offset: int, rule: str) -> None:
        super().__init__(offset)
        self.rule = rule

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.offset}, rule={self.rule!r})"
