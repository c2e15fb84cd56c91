"""Regex front end for the pattern compiler.

regex/
├── charset.py   # CharSet code-point interval sets
├── nodes.py     # Syntax tree node types
└── parser.py    # RegexParser, parse_regex(), escape()
"""

from lexmatic.regex.charset import CharSet
from lexmatic.regex.nodes import Alternate, CharClass, Concat, Empty, Node, Repeat, is_nullable
from lexmatic.regex.parser import escape, parse_regex

__all__ = [
    "Alternate",
    "CharClass",
    "CharSet",
    "Concat",
    "Empty",
    "Node",
    "Repeat",
    "escape",
    "is_nullable",
    "parse_regex",
]
