"""Tests for ContextVar-based lexer configuration.

Validates thread isolation, context manager behavior, and that a built
Lexer keeps the config it was built with.
"""

from threading import Thread

import pytest

from lexmatic import (
    Lexer,
    LexerConfig,
    Literal,
    Regex,
    Rule,
    UnrecognizedInputError,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)


class TestLexerConfigDataclass:
    """Test LexerConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = LexerConfig()
        assert config.minimize is True
        assert config.max_dfa_states == 10_000
        assert config.dot_matches_newline is False
        assert config.case_insensitive is False

    def test_immutability(self) -> None:
        config = LexerConfig()
        with pytest.raises(AttributeError):
            config.minimize = False  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = LexerConfig.from_dict({"case_insensitive": True, "unknown_key": 1})
        assert config.case_insensitive is True
        assert config.minimize is True


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def test_get_returns_default(self) -> None:
        reset_lexer_config()
        assert get_lexer_config() == LexerConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_lexer_config(LexerConfig(minimize=False))
            assert get_lexer_config().minimize is False
        finally:
            reset_lexer_config()
        assert get_lexer_config().minimize is True

    def test_context_manager_restores_previous(self) -> None:
        with lexer_config_context(LexerConfig(case_insensitive=True)):
            assert get_lexer_config().case_insensitive is True
        assert get_lexer_config().case_insensitive is False

    def test_context_manager_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with lexer_config_context(LexerConfig(case_insensitive=True)):
                raise RuntimeError("boom")
        assert get_lexer_config().case_insensitive is False

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, bool] = {}

        def worker(thread_id: int, config: LexerConfig) -> None:
            set_lexer_config(config)
            lexer = Lexer([Rule("Import", Literal("import"))])
            results[thread_id] = lexer.config.case_insensitive

        configs = [LexerConfig(case_insensitive=i % 2 == 0) for i in range(4)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: True, 1: False, 2: True, 3: False}


class TestConfigAffectsBuild:
    """The active config shapes the automaton; the Lexer keeps it."""

    def test_case_insensitive(self) -> None:
        rules = [Rule("Import", Literal("import"))]
        assert list(Lexer(rules).lex("IMPORT")) == [UnrecognizedInputError(0)]
        lexer = Lexer(rules, config=LexerConfig(case_insensitive=True))
        assert [lx.token.type for lx in lexer.lex("IMPORT")] == ["Import"]

    def test_dot_matches_newline(self) -> None:
        rules = [Rule("Any", Regex("a.b"))]
        assert list(Lexer(rules).lex("a\nb")) == [UnrecognizedInputError(0)]
        lexer = Lexer(rules, config=LexerConfig(dot_matches_newline=True))
        assert lexer.tokenize("a\nb")[0].end == 3

    def test_context_config_captured_at_build(self) -> None:
        rules = [Rule("Import", Literal("import"))]
        with lexer_config_context(LexerConfig(case_insensitive=True)):
            lexer = Lexer(rules)
        assert lexer.config.case_insensitive is True
        assert lexer.tokenize("ImPoRt")[0].end == 6
