"""Benchmark scan throughput and automaton construction.

Run with:
    pytest benchmarks/benchmark_scan.py -v --benchmark-only
"""

import pytest

from lexmatic import DictAutomatonCache, Lexer, LexerConfig, RuleSetBuilder


@pytest.mark.benchmark(group="scan")
def test_benchmark_tokenize(benchmark, import_lexer, large_source):
    """Eager scan of a large input."""
    lexemes = benchmark(import_lexer.tokenize, large_source)
    assert lexemes[-1].end <= len(large_source)


@pytest.mark.benchmark(group="scan")
def test_benchmark_lazy_first_token(benchmark, import_lexer, large_source):
    """Lazy scan only pays for what it pulls."""
    benchmark(lambda: next(import_lexer.lex(large_source)))


def _keyword_rules():
    builder = RuleSetBuilder()
    for i in range(50):
        builder.token(f"Kw{i}", f"keyword{i}")
    return builder.regex("Ident", r"[a-z_][a-z0-9_]*", capture=True).skip(r"\s+").build()


@pytest.mark.benchmark(group="build")
@pytest.mark.parametrize("minimize", [True, False])
def test_benchmark_build(benchmark, minimize):
    """Automaton construction for many overlapping keywords."""
    rules = _keyword_rules()
    config = LexerConfig(minimize=minimize)
    benchmark(Lexer, rules, config=config)


@pytest.mark.benchmark(group="build")
def test_benchmark_build_cached(benchmark):
    """Construction when the automaton is already cached."""
    rules = _keyword_rules()
    cache = DictAutomatonCache()
    Lexer(rules, cache=cache)
    benchmark(Lexer, rules, cache=cache)
