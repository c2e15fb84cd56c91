"""Recursive descent parser for lexmatic regex syntax.

Grammar (roughly):
    pattern     -> alternation
    alternation -> sequence ('|' sequence)*
    sequence    -> term*
    term        -> atom quantifier?
    atom        -> literal | escape | charclass | group | '.'
    quantifier  -> ('*' | '+' | '?' | '{n}' | '{n,}' | '{n,m}') '?'?
    group       -> '(' pattern ')' | '(?:' pattern ')' | '(?flags:' pattern ')'
                 | '(?flags)'
    charclass   -> '[' '^'? cc_item+ ']'

Flags are ``i`` (ASCII case-insensitive) and ``s`` (``.`` matches newline),
optionally negated with ``-``. Anchors, word boundaries, backreferences and
lookaround are rejected: a token pattern is always matched anchored at the
scan position and only its length matters.

Example:
    >>> parse_regex("[a-z]+")
    Repeat(child=CharClass(chars=CharSet('a'-'z')), min_count=1, max_count=None)
"""

from __future__ import annotations

import string

from lexmatic.errors import PatternError
from lexmatic.regex.charset import (
    ANY,
    ANY_BUT_NEWLINE,
    MAX_CODEPOINT,
    PERL_CLASSES,
    CharSet,
)
from lexmatic.regex.nodes import Alternate, CharClass, Concat, Empty, Node, Repeat

# Upper bound for {n,m} counts; each repetition is expanded in the NFA
MAX_REPEAT = 1000

_META = frozenset("\\.+*?()|[]{}^$#&-~")
_HEX_DIGITS = frozenset(string.hexdigits)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "e": "\x1b",
    "0": "\0",
}

_POSIX_CLASSES: dict[str, CharSet] = {
    "alnum": CharSet.from_ranges([(48, 57), (65, 90), (97, 122)]),
    "alpha": CharSet.from_ranges([(65, 90), (97, 122)]),
    "ascii": CharSet(((0, 127),)),
    "blank": CharSet.of(" ", "\t"),
    "cntrl": CharSet.from_ranges([(0, 31), (127, 127)]),
    "digit": PERL_CLASSES["d"],
    "graph": CharSet(((33, 126),)),
    "lower": CharSet.span("a", "z"),
    "print": CharSet(((32, 126),)),
    "punct": CharSet.from_ranges([(33, 47), (58, 64), (91, 96), (123, 126)]),
    "space": PERL_CLASSES["s"],
    "upper": CharSet.span("A", "Z"),
    "word": PERL_CLASSES["w"],
    "xdigit": CharSet.from_ranges([(48, 57), (65, 70), (97, 102)]),
}


def escape(text: str) -> str:
    """Escape every regex metacharacter in text.

    The result, parsed as a regex, matches exactly text.

    Examples:
        >>> escape("a+b")
        'a\\\\+b'
    """
    return "".join(f"\\{c}" if c in _META else c for c in text)


def parse_regex(
    pattern: str,
    *,
    case_insensitive: bool = False,
    dot_matches_newline: bool = False,
) -> Node:
    """Parse pattern into a syntax tree.

    Raises:
        PatternError: If pattern is not valid lexmatic regex syntax
    """
    parser = RegexParser(
        pattern,
        case_insensitive=case_insensitive,
        dot_matches_newline=dot_matches_newline,
    )
    return parser.parse()


class RegexParser:
    """Single-use recursive descent parser over one pattern string."""

    __slots__ = ("_pattern", "_pos", "_length", "_case_insensitive", "_dot_all")

    def __init__(
        self,
        pattern: str,
        *,
        case_insensitive: bool = False,
        dot_matches_newline: bool = False,
    ) -> None:
        self._pattern = pattern
        self._pos = 0
        self._length = len(pattern)
        self._case_insensitive = case_insensitive
        self._dot_all = dot_matches_newline

    def parse(self) -> Node:
        result = self._parse_alternation()
        if self._pos < self._length:
            # Only an unbalanced ')' stops the top-level alternation early
            raise self._error("unmatched ')'")
        return result

    # =========================================================================
    # Cursor helpers
    # =========================================================================

    def _peek(self, offset: int = 0) -> str | None:
        pos = self._pos + offset
        if pos < self._length:
            return self._pattern[pos]
        return None

    def _next(self, what: str) -> str:
        if self._pos >= self._length:
            raise self._error(f"unexpected end of pattern, expected {what}")
        char = self._pattern[self._pos]
        self._pos += 1
        return char

    def _match(self, s: str) -> bool:
        if self._pattern.startswith(s, self._pos):
            self._pos += len(s)
            return True
        return False

    def _error(self, message: str, position: int | None = None) -> PatternError:
        return PatternError(
            message,
            pattern=self._pattern,
            position=self._pos if position is None else position,
        )

    # =========================================================================
    # Structure
    # =========================================================================

    def _parse_alternation(self) -> Node:
        options = [self._parse_sequence()]
        while self._match("|"):
            options.append(self._parse_sequence())
        if len(options) == 1:
            return options[0]
        return Alternate(tuple(options))

    def _parse_sequence(self) -> Node:
        parts: list[Node] = []
        while True:
            char = self._peek()
            if char is None or char in "|)":
                break
            term = self._parse_term()
            if not isinstance(term, Empty):
                parts.append(term)
        if not parts:
            return Empty()
        if len(parts) == 1:
            return parts[0]
        return Concat(tuple(parts))

    def _parse_term(self) -> Node:
        atom = self._parse_atom()
        bounds = self._parse_quantifier()
        if bounds is None:
            return atom
        if self._peek() in ("*", "+", "?", "{"):
            raise self._error("repeated quantifier")
        return Repeat(atom, bounds[0], bounds[1])

    def _parse_quantifier(self) -> tuple[int, int | None] | None:
        char = self._peek()
        if char == "*":
            self._pos += 1
            bounds: tuple[int, int | None] = (0, None)
        elif char == "+":
            self._pos += 1
            bounds = (1, None)
        elif char == "?":
            self._pos += 1
            bounds = (0, 1)
        elif char == "{":
            bounds = self._parse_counted()
        else:
            return None
        # Lazy modifier: irrelevant when every match length is reported
        self._match("?")
        return bounds

    def _parse_counted(self) -> tuple[int, int | None]:
        start = self._pos
        self._pos += 1
        low = self._parse_decimal()
        high: int | None = low
        if self._match(","):
            high = None if self._peek() == "}" else self._parse_decimal()
        if not self._match("}"):
            raise self._error("unclosed counted repetition", position=start)
        if high is not None and high < low:
            raise self._error(f"invalid repetition range {{{low},{high}}}", position=start)
        if max(low, high or 0) > MAX_REPEAT:
            raise self._error(f"repetition count exceeds {MAX_REPEAT}", position=start)
        return low, high

    def _parse_decimal(self) -> int:
        start = self._pos
        while (char := self._peek()) is not None and char.isdigit() and char.isascii():
            self._pos += 1
        if self._pos == start:
            raise self._error("expected a decimal number in counted repetition")
        return int(self._pattern[start : self._pos])

    # =========================================================================
    # Atoms
    # =========================================================================

    def _parse_atom(self) -> Node:
        char = self._peek()
        if char == "(":
            return self._parse_group()
        if char == "[":
            return CharClass(self._parse_bracket_class())
        if char == "\\":
            return CharClass(self._parse_escape())
        if char in ("*", "+", "?", "{"):
            raise self._error("quantifier without a preceding expression")
        if char in ("^", "$"):
            raise self._error(f"anchor {char!r} is not supported in token patterns")
        self._pos += 1
        if char == ".":
            return CharClass(ANY if self._dot_all else ANY_BUT_NEWLINE)
        return CharClass(self._fold(CharSet.of(char)))

    def _parse_group(self) -> Node:
        start = self._pos
        self._pos += 1
        saved = (self._case_insensitive, self._dot_all)
        if self._match("?"):
            if self._peek() in ("=", "!", "<"):
                raise self._error("lookaround is not supported", position=start)
            if self._peek() == "P" or self._peek() == "'":
                raise self._error("named groups are not supported", position=start)
            scoped = self._parse_flags()
            if not scoped:
                # (?flags) applies to the rest of the enclosing group
                return Empty()
        inner = self._parse_alternation()
        if not self._match(")"):
            raise self._error("unclosed group", position=start)
        self._case_insensitive, self._dot_all = saved
        return inner

    def _parse_flags(self) -> bool:
        """Parse inline flags after '(?'; return True if a scoped group follows."""
        enable = True
        flags = 0
        while True:
            char = self._next("flag or ':' or ')'")
            if char == ":":
                return True
            if char == ")":
                if not flags:
                    raise self._error("empty flag group", position=self._pos - 1)
                return False
            if char == "-" and enable:
                enable = False
            elif char == "i":
                self._case_insensitive = enable
                flags += 1
            elif char == "s":
                self._dot_all = enable
                flags += 1
            else:
                raise self._error(f"unknown inline flag {char!r}", position=self._pos - 1)

    def _parse_escape(self) -> CharSet:
        start = self._pos
        self._pos += 1
        char = self._next("escape sequence")
        if char in PERL_CLASSES:
            return PERL_CLASSES[char]
        if char in _SIMPLE_ESCAPES:
            return self._fold(CharSet.of(_SIMPLE_ESCAPES[char]))
        if char in ("x", "u", "U"):
            return self._fold(CharSet.of(self._parse_hex_escape(char, start)))
        if char in "bBAzZ":
            raise self._error(f"anchor '\\{char}' is not supported in token patterns", position=start)
        if char.isdigit():
            raise self._error("backreferences are not supported", position=start)
        if char in ("p", "P"):
            raise self._error("unicode property classes are not supported", position=start)
        if char.isalnum():
            raise self._error(f"unknown escape '\\{char}'", position=start)
        return self._fold(CharSet.of(char))

    def _parse_hex_escape(self, kind: str, start: int) -> str:
        if self._match("{"):
            end = self._pattern.find("}", self._pos)
            if end == -1:
                raise self._error("unclosed hex escape", position=start)
            digits = self._pattern[self._pos : end]
            self._pos = end + 1
        else:
            width = {"x": 2, "u": 4, "U": 8}[kind]
            digits = self._pattern[self._pos : self._pos + width]
            self._pos += width
            if len(digits) != width:
                raise self._error("truncated hex escape", position=start)
        if not digits or not all(c in _HEX_DIGITS for c in digits):
            raise self._error(f"invalid hex digits {digits!r}", position=start)
        value = int(digits, 16)
        if value > MAX_CODEPOINT:
            raise self._error(f"invalid code point {digits!r}", position=start)
        return chr(value)

    # =========================================================================
    # Bracket classes
    # =========================================================================

    def _parse_bracket_class(self) -> CharSet:
        start = self._pos
        self._pos += 1
        negated = self._match("^")
        items: list[CharSet] = []
        first = True
        while True:
            char = self._peek()
            if char is None:
                raise self._error("unclosed character class", position=start)
            if char == "]" and not first:
                self._pos += 1
                break
            first = False
            if char == "[" and self._peek(1) == ":":
                items.append(self._parse_posix_class())
                continue
            low = self._parse_class_atom()
            if self._peek() == "-" and self._peek(1) not in ("]", None):
                self._pos += 1
                high = self._parse_class_atom()
                items.append(self._class_range(low, high, start))
            else:
                items.append(low)
        chars = self._fold(CharSet().union(*items))
        if negated:
            chars = chars.negate()
        if chars.is_empty():
            raise self._error("character class matches nothing", position=start)
        return chars

    def _parse_class_atom(self) -> CharSet:
        if self._peek() == "\\":
            return self._parse_escape()
        return CharSet.of(self._next("class member"))

    def _class_range(self, low: CharSet, high: CharSet, start: int) -> CharSet:
        if len(low.ranges) != 1 or len(high.ranges) != 1:
            raise self._error("class escape used as a range endpoint", position=start)
        lo, lo_end = low.ranges[0]
        hi, hi_end = high.ranges[0]
        if lo != lo_end or hi != hi_end:
            raise self._error("class escape used as a range endpoint", position=start)
        if hi < lo:
            raise self._error(f"invalid class range {chr(lo)!r}-{chr(hi)!r}", position=start)
        return CharSet(((lo, hi),))

    def _parse_posix_class(self) -> CharSet:
        start = self._pos
        end = self._pattern.find(":]", self._pos + 2)
        if end == -1:
            raise self._error("unclosed POSIX class", position=start)
        name = self._pattern[self._pos + 2 : end]
        negated = name.startswith("^")
        name = name.lstrip("^")
        if name not in _POSIX_CLASSES:
            raise self._error(f"unknown POSIX class {name!r}", position=start)
        self._pos = end + 2
        chars = _POSIX_CLASSES[name]
        return chars.negate() if negated else chars

    def _fold(self, chars: CharSet) -> CharSet:
        return chars.case_folded() if self._case_insensitive else chars
