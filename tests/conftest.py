"""
Pytest fixtures for the automaton construction tests.
"""

import pytest

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.delta import TransitionKind
from regex_anfa.compilers.bidirectional_compiler import BidirectionalCompiler
from regex_anfa.compilers.coverage_compiler import CoverageCompiler
from regex_anfa.compilers.forward_compiler import ForwardCompiler


def _epsilon_closure(anfa, states):
    closure = set(states)
    stack = list(states)
    while stack:
        record = anfa.delta[stack.pop()]
        if record.is_epsilon:
            for target in record.targets:
                if target not in closure:
                    closure.add(target)
                    stack.append(target)
    return closure


def simulate(anfa, text):
    """Walk a finalized automaton over ``text``; True if ``f`` is reached at the end."""
    assert anfa.is_finalized, "simulate needs a finalized automaton"
    current = _epsilon_closure(anfa, {anfa.q0})
    for symbol in text:
        moved = set()
        for q in current:
            record = anfa.delta[q]
            if record.kind is TransitionKind.SINGLE and record.label == symbol:
                moved.add(record.targets[0])
        current = _epsilon_closure(anfa, moved)
    return anfa.f in current


@pytest.fixture
def accepts():
    """Reference simulator; matching lives outside the library."""
    return simulate


@pytest.fixture
def anfa():
    return ANFA()


@pytest.fixture
def forward_compiler():
    return ForwardCompiler()


@pytest.fixture
def coverage_compiler():
    return CoverageCompiler()


@pytest.fixture
def dual_compiler():
    return BidirectionalCompiler()


@pytest.fixture
def strings_over_ab():
    """Every string over {a, b} up to length 4."""
    strings = [""]
    frontier = [""]
    for _ in range(4):
        frontier = [s + c for s in frontier for c in "ab"]
        strings.extend(frontier)
    return strings
