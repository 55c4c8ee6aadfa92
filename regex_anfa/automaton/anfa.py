# regex_anfa/automaton/anfa.py
"""
Thompson construction over an append-only state table.

An ANFA owns one Delta. Primitive builders append states and hand back an
AutomataRef for the new fragment; composition operators wire fragments
together by patching the EMPTY exit state of each operand, appending only
the constant number of states Thompson's construction needs. Nothing is
ever removed, so refs to earlier fragments stay valid while new ones are
built.

Definition of `'a'`:

    | Q | T | Q |
    |---|---|---|
    | 0 | a | 1 | (q0)
    | 1 |   |   | (f)

Definition of `'a' ⋅ 'b'`:

    | Q | T | Q |
    |---|---|---|
    | 0 | a | 1 | (q0)
    | 1 | ε | 2 |
    | 2 | b | 3 |
    | 3 |   |   | (f)

Definition of `'a' *`:

    | Q | T | Q    |
    |---|---|------|
    | 0 | a | 1    |
    | 1 | ε | 3    |
    | 2 | ε | 3    | (q0)
    | 3 | ε | 0, 4 |
    | 4 |   |      | (f)

Definition of `'a' ∪ 'b'`:

    | Q | T | Q    |
    |---|---|------|
    | 0 | a | 1    |
    | 1 | ε | 5    |
    | 2 | b | 3    |
    | 3 | ε | 5    |
    | 4 | ε | 0, 2 | (q0)
    | 5 |   |      | (f)
"""

from typing import Optional, Tuple

import pandas as pd

from regex_anfa.automaton.delta import Delta, QId, Transition
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.config import AutomatonConfig
from regex_anfa.errors import DanglingStateViolation, InsufficientOperands
from regex_anfa.utils.logging_config import get_logger

logger = get_logger(__name__)


class ANFA:
    """
    Automaton under construction.

    The overall entry and exit (``q0``/``f``) stay unset until
    ``finalize`` is called; before that the automaton is reachable only
    through the refs the caller threads between builder calls.

    Args:
        config: Optional construction settings
    """

    def __init__(self, config: Optional[AutomatonConfig] = None):
        self.config = config or AutomatonConfig()
        self.delta = Delta(max_states=self.config.max_states)
        self.q0: Optional[QId] = None
        self.f: Optional[QId] = None

    @classmethod
    def from_nothing(cls, config: Optional[AutomatonConfig] = None) -> Tuple['ANFA', AutomataRef]:
        """Return a new automaton holding a single nothing fragment."""
        anfa = cls(config)
        return anfa, anfa.expr_nothing()

    @classmethod
    def from_epsilon(cls, config: Optional[AutomatonConfig] = None) -> Tuple['ANFA', AutomataRef]:
        """Return a new automaton holding a single epsilon fragment."""
        anfa = cls(config)
        return anfa, anfa.expr_epsilon()

    @classmethod
    def from_literal(cls, symbol: str,
                     config: Optional[AutomatonConfig] = None) -> Tuple['ANFA', AutomataRef]:
        """Return a new automaton holding a single literal fragment."""
        anfa = cls(config)
        return anfa, anfa.expr_literal(symbol)

    @property
    def is_finalized(self) -> bool:
        return self.q0 is not None and self.f is not None

    def __len__(self) -> int:
        return len(self.delta)

    def __repr__(self) -> str:
        return f"ANFA(states={len(self.delta)}, q0={self.q0}, f={self.f})"

    # ------------------------------------------------------------------
    # Primitive builders
    # ------------------------------------------------------------------

    def expr_nothing(self) -> AutomataRef:
        """
        Append an acceptor that never reaches its final state.

            --> ( 0 )  (( 1 ))
        """
        self.delta.reserve(2)
        q0 = self.delta.append(Transition.empty())
        f = self.delta.append(Transition.empty())
        ref = AutomataRef(q0, f)
        logger.debug(f"expr_nothing -> {ref}")
        return ref

    def expr_epsilon(self) -> AutomataRef:
        """
        Append an acceptor already in its final state.

            --> (( 0 ))
        """
        q = self.delta.append(Transition.empty())
        ref = AutomataRef(q, q)
        logger.debug(f"expr_epsilon -> {ref}")
        return ref

    def expr_literal(self, symbol: str) -> AutomataRef:
        """
        Append an acceptor that reaches its final state on ``symbol``.

            --> ( 0 ) -- 'a' --> (( 1 ))

        Raises:
            TypeError: If symbol validation is on and symbol is not a str
            ValueError: If symbol validation is on and symbol is not one character
        """
        if self.config.validate_symbols:
            _check_symbol(symbol)
        self.delta.reserve(2)
        q0 = len(self.delta)
        f = q0 + 1
        self.delta.append(Transition.single(f, symbol))
        self.delta.append(Transition.empty())
        ref = AutomataRef(q0, f)
        logger.debug(f"expr_literal({symbol!r}) -> {ref}")
        return ref

    # ------------------------------------------------------------------
    # Composition operators
    # ------------------------------------------------------------------

    def concatenate(self, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        """
        Point the exit of ``a`` at the entry of ``b``. Appends no states.

            --> ( 0 ) -- 'a' --> ( 1 ) -- ε --> ( 2 ) -- 'b' --> (( 3 ))

        Concatenation is associative up to the language accepted.

        Raises:
            InsufficientOperands: If either operand is missing
            DanglingStateViolation: If either operand was already consumed
        """
        a, b = self.check_operands("concatenate", a, b)
        self.delta.patch(a.f, Transition.single(b.q0))
        ref = AutomataRef(a.q0, b.f)
        logger.debug(f"concatenate({a}, {b}) -> {ref}")
        return ref

    def star(self, a: AutomataRef) -> AutomataRef:
        """
        Repeat ``a`` zero or more times.

                                    /-- 0 --> ( 0 ) -- 'a' --> ( 1 )
            --> ( 2 ) -- ε --> ( 3 ) <------------ ε ------------|
                                    \\-- 1 --> (( 4 ))

        Raises:
            InsufficientOperands: If the operand is missing
            DanglingStateViolation: If the operand was already consumed
        """
        a, = self.check_operands("star", a)
        self.delta.reserve(3)
        entry = len(self.delta)
        loop = entry + 1
        f = entry + 2
        self.delta.append(Transition.single(loop))
        self.delta.append(Transition.fork(a.q0, f))
        self.delta.append(Transition.empty())
        self.delta.patch(a.f, Transition.single(loop))
        ref = AutomataRef(entry, f)
        logger.debug(f"star({a}) -> {ref}")
        return ref

    def union(self, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        """
        Accept whatever ``a`` or ``b`` accepts.

                / -- 0 --> ( 0 ) -- 'a' --> ( 1 ) --\\
            ( 4 )                                    ε --> (( 5 ))
                \\ -- 1 --> ( 2 ) -- 'b' --> ( 3 ) --/

        Raises:
            InsufficientOperands: If either operand is missing
            DanglingStateViolation: If either operand was already consumed
        """
        a, b = self.check_operands("union", a, b)
        self.delta.reserve(2)
        q0 = len(self.delta)
        f = q0 + 1
        self.delta.append(Transition.fork(a.q0, b.q0))
        self.delta.append(Transition.empty())
        self.delta.patch(a.f, Transition.single(f))
        self.delta.patch(b.f, Transition.single(f))
        ref = AutomataRef(q0, f)
        logger.debug(f"union({a}, {b}) -> {ref}")
        return ref

    def finalize(self, ref: AutomataRef) -> None:
        """
        Make ``ref`` the automaton's overall entry and exit.

        Calling again overwrites the previous boundary.
        """
        if ref is None:
            raise InsufficientOperands("finalize requires a ref", "finalize")
        ref = self._normalize("finalize", ref)
        for qid in ref:
            if qid not in self.delta:
                logger.error(f"finalize: state {qid} is not in a table of {len(self.delta)} states")
                raise DanglingStateViolation(f"State {qid} does not exist", qid, "finalize")
        if not self.delta.is_empty(ref.f):
            logger.warning(f"finalize: final state {ref.f} of {ref} already has a transition")
        if self.is_finalized:
            logger.debug(f"Overwriting finalized boundary [{self.q0}, {self.f}] with {ref}")
        self.q0, self.f = ref.q0, ref.f

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def live_ref(self, ref: AutomataRef) -> bool:
        """Whether ``ref`` can still be composed, i.e. its exit is dangling."""
        return ref.q0 in self.delta and ref.f in self.delta and self.delta.is_empty(ref.f)

    def validate(self) -> bool:
        """
        Check the table's structural integrity.

        Returns:
            bool: True if every edge lands inside the table and, once
            finalized, the boundary states exist and the exit is empty
        """
        size = len(self.delta)
        valid = True
        for qid, record in enumerate(self.delta):
            for target in self.delta.targets(qid):
                if target >= size:
                    logger.error(f"State {qid} has invalid target {target}")
                    valid = False

        if self.is_finalized:
            if self.q0 not in self.delta or self.f not in self.delta:
                logger.error(f"Boundary [{self.q0}, {self.f}] out of range [0, {size})")
                return False
            if not self.delta.is_empty(self.f):
                logger.error(f"Final state {self.f} has outgoing transition {self.delta[self.f]}")
                valid = False
        return valid

    def to_frame(self) -> pd.DataFrame:
        """State table view with a ``role`` column marking q0 and f."""
        frame = self.delta.to_frame()
        roles = []
        for qid in frame['q']:
            if qid == self.q0 and qid == self.f:
                roles.append('q0 = f')
            elif qid == self.q0:
                roles.append('q0')
            elif qid == self.f:
                roles.append('f')
            else:
                roles.append('')
        frame['role'] = roles
        return frame

    def check_operands(self, operation: str, *refs: AutomataRef) -> Tuple[AutomataRef, ...]:
        """
        Verify every operand is a live ref before anything is mutated.

        Returns:
            The operands with their indices as plain ints

        Raises:
            InsufficientOperands: If an operand is missing
            DanglingStateViolation: If an operand is out of range, already
                patched, or shares its final state with another operand
        """
        if any(ref is None for ref in refs):
            logger.error(f"{operation}: missing operand")
            raise InsufficientOperands(f"{operation} requires {len(refs)} operand(s)", operation)
        refs = tuple(self._normalize(operation, ref) for ref in refs)
        for ref in refs:
            for qid in ref:
                if qid not in self.delta:
                    logger.error(f"{operation}: state {qid} of {ref} is not in the table")
                    raise DanglingStateViolation(f"State {qid} does not exist", qid, operation)
            if not self.delta.is_empty(ref.f):
                logger.error(f"{operation}: final state {ref.f} of {ref} is already patched")
                raise DanglingStateViolation(
                    f"Final state {ref.f} already has a transition", ref.f, operation)
        finals = [ref.f for ref in refs]
        if len(set(finals)) != len(finals):
            logger.error(f"{operation}: operands share final state {finals[0]}")
            raise DanglingStateViolation(
                f"Operands share final state {finals[0]}", finals[0], operation)
        return refs

    def _normalize(self, operation: str, ref) -> AutomataRef:
        try:
            return AutomataRef.of(*ref)
        except TypeError as e:
            logger.error(f"{operation}: {ref!r} is not a pair of state indices")
            raise DanglingStateViolation(f"{ref!r} is not a pair of state indices", None, operation) from e


def _check_symbol(symbol) -> None:
    if not isinstance(symbol, str):
        raise TypeError(f"Literal symbol must be a str, got {type(symbol).__name__}")
    if len(symbol) != 1:
        raise ValueError(f"Literal symbol must be a single character, got {symbol!r}")
