# regex_anfa/compilers/forward_compiler.py

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.compilers.base import Compiler


class ForwardCompiler(Compiler):
    """Builds the standard Thompson NFA used for matching."""

    name = "forward"

    def nothing(self, anfa: ANFA) -> AutomataRef:
        return anfa.expr_nothing()

    def epsilon(self, anfa: ANFA) -> AutomataRef:
        return anfa.expr_epsilon()

    def literal(self, anfa: ANFA, symbol: str) -> AutomataRef:
        return anfa.expr_literal(symbol)

    def concatenate(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        return anfa.concatenate(a, b)

    def star(self, anfa: ANFA, a: AutomataRef) -> AutomataRef:
        return anfa.star(a)

    def union(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        return anfa.union(a, b)
