"""Automaton construction for the lexmatic engine.

automaton/
├── nfa.py   # NFABuilder: Thompson construction tagged by rule id
└── dfa.py   # build_dfa(): subset construction, pruning, minimization
"""

from lexmatic.automaton.dfa import DEAD, DFA, build_dfa
from lexmatic.automaton.nfa import NFA, NFABuilder

__all__ = ["DEAD", "DFA", "NFA", "NFABuilder", "build_dfa"]
