"""
Tests for lockstep compilation against a forward and a coverage automaton.
"""

import pytest

from regex_anfa.compilers.bidirectional_compiler import BidirectionalCompiler, DualRef
from regex_anfa.compilers.coverage_compiler import CoverageCompiler
from regex_anfa.compilers.forward_compiler import ForwardCompiler
from regex_anfa.errors import (
    DanglingStateViolation, InsufficientOperands, InternalInvariantViolation
)


class FailingStarForward(ForwardCompiler):
    def star(self, anfa, a):
        raise InternalInvariantViolation("forward star failed", "star")


class FailingStarCoverage(CoverageCompiler):
    def star(self, anfa, a):
        raise InternalInvariantViolation("coverage star failed", "star")


def build_a_or_b_star_b(compiler, machines):
    a = compiler.literal(machines, 'a')
    b = compiler.literal(machines, 'b')
    loop = compiler.star(machines, compiler.union(machines, a, b))
    ref = compiler.concatenate(machines, loop, compiler.literal(machines, 'b'))
    compiler.finalize(machines, ref)
    return ref


class TestBidirectionalCompiler:

    def test_defaults(self, dual_compiler):
        assert isinstance(dual_compiler.forward, ForwardCompiler)
        assert isinstance(dual_compiler.coverage, CoverageCompiler)

    def test_a_or_b_star_b(self, dual_compiler, accepts, strings_over_ab):
        machines = dual_compiler.new_automata()
        ref = build_a_or_b_star_b(dual_compiler, machines)

        assert isinstance(ref, DualRef)
        assert (machines.forward.q0, machines.forward.f) == ref.forward
        assert (machines.coverage.q0, machines.coverage.f) == ref.coverage
        for text in strings_over_ab:
            expected = text.endswith('b')
            assert accepts(machines.forward, text) == expected, text
            assert accepts(machines.coverage, text) == expected, text
        assert not accepts(machines.forward, "abc")

    def test_sides_advance_by_same_operation_count(self, dual_compiler):
        machines = dual_compiler.new_automata()
        build_a_or_b_star_b(dual_compiler, machines)

        assert dual_compiler.coverage.operations(machines.coverage) == 6
        # The coverage side owns one junction state per concatenation.
        assert len(machines.coverage) == len(machines.forward) + 1

    def test_factories(self, dual_compiler, accepts):
        machines, ref = dual_compiler.from_literal('a')
        b = dual_compiler.literal(machines, 'b')
        dual_compiler.finalize(machines, dual_compiler.union(machines, ref, b))
        assert accepts(machines.forward, "a")
        assert accepts(machines.coverage, "b")

        machines, ref = dual_compiler.from_epsilon()
        assert ref.forward == ref.coverage == (0, 0)

        machines, ref = dual_compiler.from_nothing()
        assert ref.forward == ref.coverage == (0, 1)

    def test_reused_ref_fails_on_forward_side_first(self, dual_compiler):
        machines = dual_compiler.new_automata()
        a = dual_compiler.literal(machines, 'a')
        dual_compiler.star(machines, a)
        sizes = (len(machines.forward), len(machines.coverage))

        with pytest.raises(DanglingStateViolation) as excinfo:
            dual_compiler.star(machines, a)

        assert excinfo.value.side == "forward"
        assert (len(machines.forward), len(machines.coverage)) == sizes
        assert dual_compiler.coverage.operations(machines.coverage) == 2

    def test_coverage_failure_is_reported_after_forward_runs(self):
        compiler = BidirectionalCompiler(coverage=FailingStarCoverage())
        machines = compiler.new_automata()
        a = compiler.literal(machines, 'a')

        with pytest.raises(InternalInvariantViolation) as excinfo:
            compiler.star(machines, a)

        assert excinfo.value.side == "coverage"
        # No rollback: the forward side keeps its star states.
        assert len(machines.forward) == 5
        assert len(machines.coverage) == 2

    def test_forward_error_wins_when_both_fail(self):
        compiler = BidirectionalCompiler(FailingStarForward(), FailingStarCoverage())
        machines = compiler.new_automata()
        a = compiler.literal(machines, 'a')

        with pytest.raises(InternalInvariantViolation) as excinfo:
            compiler.star(machines, a)

        assert excinfo.value.side == "forward"
        assert "forward star failed" in str(excinfo.value)

    def test_symbol_errors_are_tagged(self, dual_compiler):
        machines = dual_compiler.new_automata()
        with pytest.raises(ValueError) as excinfo:
            dual_compiler.literal(machines, 'ab')
        assert excinfo.value.side == "forward"
        assert len(machines.forward) == len(machines.coverage) == 0

    def test_missing_operand(self, dual_compiler):
        machines = dual_compiler.new_automata()
        a = dual_compiler.literal(machines, 'a')
        with pytest.raises(InsufficientOperands):
            dual_compiler.concatenate(machines, a, None)
        with pytest.raises(InsufficientOperands):
            dual_compiler.star(machines, None)
