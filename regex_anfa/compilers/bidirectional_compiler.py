# regex_anfa/compilers/bidirectional_compiler.py
"""
Drives a forward and a coverage compiler in lockstep from one call sequence.

Every logical operation is applied to both automata, forward first. Both
sides are always invoked, so the two automata have seen the same number
of operations even when a call fails. If either side raised, the first
error in call order is re-raised with ``side`` set; nothing is rolled
back, since both sides only append and patch. After a failure the two
refs are out of step and must not be composed further.
"""

from typing import Callable, List, NamedTuple, Optional, Tuple

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.compilers.base import Compiler
from regex_anfa.compilers.coverage_compiler import CoverageCompiler
from regex_anfa.compilers.forward_compiler import ForwardCompiler
from regex_anfa.errors import AutomatonError, InsufficientOperands
from regex_anfa.utils.logging_config import get_logger

logger = get_logger(__name__)

# Errors a side can report; anything else is a bug and propagates at once.
SIDE_ERRORS = (AutomatonError, ValueError, TypeError)


class DualANFA(NamedTuple):
    forward: ANFA
    coverage: ANFA


class DualRef(NamedTuple):
    forward: AutomataRef
    coverage: AutomataRef


class BidirectionalCompiler:
    """
    Pairs two compilers and applies every operation to both.

    Args:
        forward: Compiler for the matching automaton (ForwardCompiler by default)
        coverage: Compiler for the provenance automaton (CoverageCompiler by default)
    """

    def __init__(self, forward: Optional[Compiler] = None, coverage: Optional[Compiler] = None):
        self.forward = forward or ForwardCompiler()
        self.coverage = coverage or CoverageCompiler()

    def new_automata(self) -> DualANFA:
        return DualANFA(self.forward.new_automaton(), self.coverage.new_automaton())

    def from_nothing(self) -> Tuple[DualANFA, DualRef]:
        machines = self.new_automata()
        return machines, self.nothing(machines)

    def from_epsilon(self) -> Tuple[DualANFA, DualRef]:
        machines = self.new_automata()
        return machines, self.epsilon(machines)

    def from_literal(self, symbol: str) -> Tuple[DualANFA, DualRef]:
        machines = self.new_automata()
        return machines, self.literal(machines, symbol)

    def nothing(self, machines: DualANFA) -> DualRef:
        return self._lockstep(
            "nothing",
            lambda: self.forward.nothing(machines.forward),
            lambda: self.coverage.nothing(machines.coverage),
        )

    def epsilon(self, machines: DualANFA) -> DualRef:
        return self._lockstep(
            "epsilon",
            lambda: self.forward.epsilon(machines.forward),
            lambda: self.coverage.epsilon(machines.coverage),
        )

    def literal(self, machines: DualANFA, symbol: str) -> DualRef:
        return self._lockstep(
            "literal",
            lambda: self.forward.literal(machines.forward, symbol),
            lambda: self.coverage.literal(machines.coverage, symbol),
        )

    def concatenate(self, machines: DualANFA, a: DualRef, b: DualRef) -> DualRef:
        _require("concatenate", a, b)
        return self._lockstep(
            "concatenate",
            lambda: self.forward.concatenate(machines.forward, a.forward, b.forward),
            lambda: self.coverage.concatenate(machines.coverage, a.coverage, b.coverage),
        )

    def star(self, machines: DualANFA, a: DualRef) -> DualRef:
        _require("star", a)
        return self._lockstep(
            "star",
            lambda: self.forward.star(machines.forward, a.forward),
            lambda: self.coverage.star(machines.coverage, a.coverage),
        )

    def union(self, machines: DualANFA, a: DualRef, b: DualRef) -> DualRef:
        _require("union", a, b)
        return self._lockstep(
            "union",
            lambda: self.forward.union(machines.forward, a.forward, b.forward),
            lambda: self.coverage.union(machines.coverage, a.coverage, b.coverage),
        )

    def finalize(self, machines: DualANFA, ref: DualRef) -> None:
        _require("finalize", ref)
        self._lockstep(
            "finalize",
            lambda: self.forward.finalize(machines.forward, ref.forward),
            lambda: self.coverage.finalize(machines.coverage, ref.coverage),
        )

    def _lockstep(self, operation: str, forward_call: Callable, coverage_call: Callable):
        results = []
        errors: List[Exception] = []
        for side, call in (("forward", forward_call), ("coverage", coverage_call)):
            try:
                results.append(call())
            except SIDE_ERRORS as e:
                e.side = side
                errors.append(e)
                results.append(None)

        if errors:
            first = errors[0]
            logger.error(f"{operation} failed on the {first.side} side: {first}")
            raise first
        return DualRef(*results)

    def __repr__(self) -> str:
        return f"BidirectionalCompiler(forward={self.forward!r}, coverage={self.coverage!r})"


def _require(operation: str, *refs) -> None:
    if any(ref is None for ref in refs):
        raise InsufficientOperands(f"{operation} requires {len(refs)} operand(s)", operation)
