"""Regex syntax tree.

The parser lowers every atom (literal characters, ``.``, escapes, bracket
classes) to a CharClass, so the tree has only four node kinds plus Empty.

Thread Safety:
All nodes are frozen dataclasses and safe to share.

"""

from __future__ import annotations

from dataclasses import dataclass

from lexmatic.regex.charset import CharSet


@dataclass(frozen=True, slots=True)
class Empty:
    """Matches the empty string."""


@dataclass(frozen=True, slots=True)
class CharClass:
    """Matches one character from a set."""

    chars: CharSet


@dataclass(frozen=True, slots=True)
class Concat:
    """Sequence of patterns (abc)."""

    parts: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Alternate:
    """Alternation of patterns (a|b|c)."""

    options: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Repeat:
    """Bounded or unbounded repetition of a child pattern.

    Attributes:
        child: Repeated pattern
        min_count: Minimum repetitions
        max_count: Maximum repetitions, None for unbounded

    """

    child: Node
    min_count: int
    max_count: int | None


Node = Empty | CharClass | Concat | Alternate | Repeat


def is_nullable(node: Node) -> bool:
    """Whether node can match the empty string."""
    if isinstance(node, Empty):
        return True
    if isinstance(node, CharClass):
        return False
    if isinstance(node, Concat):
        return all(is_nullable(part) for part in node.parts)
    if isinstance(node, Alternate):
        return any(is_nullable(option) for option in node.options)
    return node.min_count == 0 or is_nullable(node.child)
