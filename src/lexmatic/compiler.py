"""Pattern compiler and automaton builder.

Turns a RuleSet into one anchored DFA. Every pattern is validated here,
before any scan can start: invalid syntax, unsupported constructs and
patterns that can match the empty string all abort the build with a
PatternError naming the offending rule.

Literal rules are compiled through the same path as regexes, from their
escaped source, so a literal is exactly a regex matching that string.

"""

from __future__ import annotations

from lexmatic.automaton import DFA, NFABuilder, build_dfa
from lexmatic.config import LexerConfig
from lexmatic.errors import PatternError
from lexmatic.regex import Node, is_nullable, parse_regex
from lexmatic.rules import Rule, RuleSet
from lexmatic.utils.logger import get_logger

logger = get_logger(__name__)


def compile_pattern(rule: Rule, config: LexerConfig) -> Node:
    """Parse and validate one rule's pattern.

    Raises:
        PatternError: If the pattern is invalid or matches the empty string
    """
    source = rule.pattern.source
    try:
        node = parse_regex(
            source,
            case_insensitive=config.case_insensitive,
            dot_matches_newline=config.dot_matches_newline,
        )
    except PatternError as exc:
        raise exc.with_rule(rule.name) from None
    if is_nullable(node):
        raise PatternError("pattern matches the empty string", pattern=source, rule=rule.name)
    return node


def build_automaton(rules: RuleSet, config: LexerConfig) -> DFA:
    """Compile every rule and union them into one DFA.

    Rule ids tag the accepting states, so the DFA reports which rules
    match at each length from a single walk.

    Raises:
        PatternError: If any pattern is rejected or the automaton is too large
    """
    builder = NFABuilder()
    for rule in rules:
        node = compile_pattern(rule, config)
        try:
            builder.add_rule(rule.id, node)
        except PatternError as exc:
            raise exc.with_rule(rule.name) from None
    nfa = builder.build()
    dfa = build_dfa(nfa, minimize=config.minimize, max_states=config.max_dfa_states)
    logger.debug(
        "Built automaton for %d rules: %d NFA states, %d DFA states, %d classes%s",
        len(rules),
        len(nfa.states),
        dfa.state_count,
        dfa.class_count,
        " (minimized)" if config.minimize else "",
    )
    return dfa
