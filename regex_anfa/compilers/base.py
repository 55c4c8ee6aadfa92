# regex_anfa/compilers/base.py

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.config import AutomatonConfig


class Compiler(ABC):
    """
    Construction strategy applied to an automaton owned by the caller.

    Every implementation accepts the same operation sequence, so several
    strategies can build structurally different automata from one
    instruction stream.
    """

    name = "compiler"

    def __init__(self, config: Optional[AutomatonConfig] = None):
        self.config = config

    def new_automaton(self) -> ANFA:
        return ANFA(self.config)

    def from_nothing(self) -> Tuple[ANFA, AutomataRef]:
        anfa = self.new_automaton()
        return anfa, self.nothing(anfa)

    def from_epsilon(self) -> Tuple[ANFA, AutomataRef]:
        anfa = self.new_automaton()
        return anfa, self.epsilon(anfa)

    def from_literal(self, symbol: str) -> Tuple[ANFA, AutomataRef]:
        anfa = self.new_automaton()
        return anfa, self.literal(anfa, symbol)

    @abstractmethod
    def nothing(self, anfa: ANFA) -> AutomataRef:
        pass

    @abstractmethod
    def epsilon(self, anfa: ANFA) -> AutomataRef:
        pass

    @abstractmethod
    def literal(self, anfa: ANFA, symbol: str) -> AutomataRef:
        pass

    @abstractmethod
    def concatenate(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        pass

    @abstractmethod
    def star(self, anfa: ANFA, a: AutomataRef) -> AutomataRef:
        pass

    @abstractmethod
    def union(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        pass

    def finalize(self, anfa: ANFA, ref: AutomataRef) -> None:
        anfa.finalize(ref)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
