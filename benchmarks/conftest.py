"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from lexmatic import Lexer, RuleSetBuilder


@pytest.fixture(scope="session")
def import_lexer() -> Lexer:
    """Lexer for the import/ident/raw-string language."""

    def end_raw_str(matched: str, remaining: str) -> int | None:
        closer = matched[1:][::-1]
        index = remaining.find(closer)
        return None if index == -1 else index + len(closer)

    return Lexer(
        RuleSetBuilder()
        .token("Import", "import")
        .token("Semi", ";")
        .regex("Ident", r"[a-zA-Z_][a-zA-Z0-9_]*", capture=True)
        .regex("RawStr", r'r#*"', capture=True, more=end_raw_str)
        .skip(r"//[^\n]*")
        .skip(r"[ \t\r\n\f]+")
        .build()
    )


@pytest.fixture
def large_source() -> str:
    """Generate a large input (~200KB) for the import language."""
    lines = []
    for i in range(5000):
        lines.append(f"import module_{i}; // comment {i}")
        if i % 10 == 0:
            lines.append(f'r#"raw "string" {i}"#')
    return "\n".join(lines)
