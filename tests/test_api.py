"""End-to-end tests for the public lexmatic API.

Covers the import/ident/semicolon language, raw strings finished by a
continuation, unrecognized input, and regression cases for prefix and
longest-match ambiguities.
"""

import pytest

from lexmatic import (
    ContinuationRefusedError,
    Lexeme,
    Lexer,
    Literal,
    Regex,
    Rule,
    RuleKind,
    RuleSetBuilder,
    ScanState,
    Token,
    UnrecognizedInputError,
)


def end_raw_str(matched: str, remaining: str) -> int | None:
    """Find the closing '"###' for an opening 'r###"'."""
    closer = matched[1:][::-1]
    index = remaining.find(closer)
    if index == -1:
        return None
    return index + len(closer)


def import_lexer() -> Lexer:
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


class TestImportLanguage:
    """Keywords, identifiers and separators with skipped whitespace and comments."""

    def test_longer_identifier_beats_keyword(self) -> None:
        results = list(import_lexer().lex("import foo_bar;import import1;"))
        assert results == [
            Lexeme(0, 6, Token("Import")),
            Lexeme(7, 14, Token("Ident", "foo_bar")),
            Lexeme(14, 15, Token("Semi")),
            Lexeme(15, 21, Token("Import")),
            Lexeme(22, 30, Token("Ident", "import1")),
            Lexeme(30, 31, Token("Semi")),
        ]

    def test_comments_and_raw_string(self) -> None:
        source = 'import // ...\nimport1; r#"abc"#'
        results = list(import_lexer().lex(source))
        assert results == [
            Lexeme(0, 6, Token("Import")),
            Lexeme(14, 21, Token("Ident", "import1")),
            Lexeme(21, 22, Token("Semi")),
            Lexeme(23, 31, Token("RawStr", 'r#"abc"#')),
        ]

    def test_lexeme_unpacks_as_triple(self) -> None:
        start, end, token = next(iter(import_lexer().lex("import")))
        assert (start, end, token.type, token.value) == (0, 6, "Import", None)

    def test_empty_input_yields_nothing(self) -> None:
        assert list(import_lexer().lex("")) == []

    def test_only_skipped_input_yields_nothing(self) -> None:
        assert list(import_lexer().lex("  // only a comment\n\t")) == []


class TestContinuation:
    """Raw strings whose end is found by a continuation."""

    def test_raw_string_extended_to_closer(self) -> None:
        results = list(import_lexer().lex('r##"abc"##'))
        assert results == [Lexeme(0, 10, Token("RawStr", 'r##"abc"##'))]

    def test_inner_quote_does_not_close(self) -> None:
        results = list(import_lexer().lex('r#"a"b"#;'))
        assert results == [
            Lexeme(0, 8, Token("RawStr", 'r#"a"b"#')),
            Lexeme(8, 9, Token("Semi")),
        ]

    def test_unterminated_raw_string_refused_at_start(self) -> None:
        results = list(import_lexer().lex('r#"abc'))
        assert results == [ContinuationRefusedError(0, "RawStr")]

    def test_refusal_anchored_at_token_start_after_prefix(self) -> None:
        results = list(import_lexer().lex('import r##"abc"#'))
        assert results[0] == Lexeme(0, 6, Token("Import"))
        error = results[-1]
        assert isinstance(error, ContinuationRefusedError)
        assert error.offset == 7
        assert error.rule == "RawStr"
        assert len(results) == 2


class TestUnrecognizedInput:
    """No rule matching at a position ends the scan with an error value."""

    def test_error_after_prefix_tokens(self) -> None:
        results = list(import_lexer().lex("import foo # bar"))
        assert results == [
            Lexeme(0, 6, Token("Import")),
            Lexeme(7, 10, Token("Ident", "foo")),
            UnrecognizedInputError(11),
        ]

    def test_error_is_final_item(self) -> None:
        scanner = import_lexer().lex("#import")
        assert next(scanner) == UnrecognizedInputError(0)
        assert scanner.state is ScanState.FAILED
        with pytest.raises(StopIteration):
            next(scanner)

    def test_caller_can_resume_past_error(self) -> None:
        lexer = import_lexer()
        results = list(lexer.lex("foo#bar"))
        error = results[-1]
        assert isinstance(error, UnrecognizedInputError)
        resumed = list(lexer.lex("foo#bar", error.offset + 1))
        assert resumed == [Lexeme(4, 7, Token("Ident", "bar"))]

    def test_tokenize_raises_terminal_error(self) -> None:
        with pytest.raises(UnrecognizedInputError) as excinfo:
            import_lexer().tokenize("import $")
        assert excinfo.value.offset == 7

    def test_tokenize_returns_lexemes(self) -> None:
        lexemes = import_lexer().tokenize("import a;")
        assert [lx.token.type for lx in lexemes] == ["Import", "Ident", "Semi"]


class TestScannerLifecycle:
    """Scanner state transitions and offsets."""

    def test_done_after_full_consumption(self) -> None:
        scanner = import_lexer().lex("a b")
        assert list(scanner) == [
            Lexeme(0, 1, Token("Ident", "a")),
            Lexeme(2, 3, Token("Ident", "b")),
        ]
        assert scanner.state is ScanState.DONE
        assert scanner.offset == 3
        assert list(scanner) == []

    def test_trailing_skip_consumed(self) -> None:
        scanner = import_lexer().lex("a   ")
        list(scanner)
        assert scanner.offset == 4
        assert scanner.state is ScanState.DONE

    def test_scanners_are_independent(self) -> None:
        lexer = import_lexer()
        first = lexer.lex("a b")
        second = lexer.lex("c d")
        assert next(first).token.value == "a"
        assert next(second).token.value == "c"
        assert next(first).token.value == "b"

    def test_start_offset_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            import_lexer().lex("abc", 4)


class TestRegressions:
    """Prefix and longest-match cases other lexer generators got wrong."""

    def test_literal_prefixes_of_longer_literal(self) -> None:
        lexer = Lexer(
            [
                Rule("Backslash", Literal("\\")),
                Rule("DoubleBackslash", Literal("\\\\")),
                Rule("EnvironmentBegin", Literal("\\begin")),
                Rule("EnvironmentEnd", Literal("\\end")),
                Rule("DocumentBegin", Literal("\\begin{document}")),
                Rule("MacroName", Regex(r"\\[a-zA-Z]+")),
            ]
        )
        first = next(iter(lexer.lex("\\begin{equation}")))
        assert first == Lexeme(0, 6, Token("EnvironmentBegin"))

    def test_falls_back_to_last_accepting_length(self) -> None:
        lexer = Lexer(
            [
                Rule("A", Literal("a")),
                Rule("B", Literal("b")),
                Rule("Abc", Regex("[ab]*c")),
            ]
        )
        tokens = [result.token.type for result in lexer.lex("aba")]
        assert tokens == ["A", "B", "A"]

    def test_partial_literal_is_an_error(self) -> None:
        lexer = Lexer([Rule("Foo", Literal("FOOB"))])
        assert list(lexer.lex("ZAP")) == [UnrecognizedInputError(0)]
        assert list(lexer.lex("FOO")) == [UnrecognizedInputError(0)]

    def test_skip_rules_may_be_declared_anywhere(self) -> None:
        lexer = Lexer(
            [
                Rule("Space", Regex(" +"), kind=RuleKind.SKIP),
                Rule("Word", Regex("[a-z]+"), capture=True),
            ]
        )
        assert [lx.token.value for lx in lexer.tokenize(" ab  cd ")] == ["ab", "cd"]

    def test_offsets_count_code_points(self) -> None:
        lexer = Lexer(
            [
                Rule("Word", Regex("[^ ]+"), capture=True),
                Rule("Space", Regex(" "), kind=RuleKind.SKIP),
            ]
        )
        assert lexer.tokenize("héllo wörld") == [
            Lexeme(0, 5, Token("Word", "héllo")),
            Lexeme(6, 11, Token("Word", "wörld")),
        ]
