# regex_anfa/compilers/program.py
"""
Replay of postfix operation sequences through an operand stack.

A regex driver walking a syntax tree bottom-up emits operations in
postfix order: `ab.c|*` is ``literal a, literal b, concatenate,
literal c, union, star``. The replay keeps the fragments on a stack,
pops operands for each operator, and finalizes the automaton with the
single fragment left at the end.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.compilers.base import Compiler
from regex_anfa.compilers.bidirectional_compiler import BidirectionalCompiler, DualANFA, DualRef
from regex_anfa.compilers.forward_compiler import ForwardCompiler
from regex_anfa.errors import AutomatonError, InsufficientOperands, InternalInvariantViolation
from regex_anfa.utils.logging_config import PerformanceTimer, get_logger

logger = get_logger(__name__)


class Op(Enum):
    """Operations of the construction algebra."""
    NOTHING = "nothing"
    EPSILON = "epsilon"
    LITERAL = "literal"
    CONCATENATE = "concatenate"
    STAR = "star"
    UNION = "union"

    @property
    def arity(self) -> int:
        return _ARITY[self]


_ARITY = {
    Op.NOTHING: 0,
    Op.EPSILON: 0,
    Op.LITERAL: 0,
    Op.CONCATENATE: 2,
    Op.STAR: 1,
    Op.UNION: 2,
}

# Compact postfix notation; any other character is a literal.
POSTFIX_OPERATORS = {
    '0': Op.NOTHING,
    '1': Op.EPSILON,
    '.': Op.CONCATENATE,
    '|': Op.UNION,
    '*': Op.STAR,
}
ESCAPE = '\\'


@dataclass(frozen=True)
class Instruction:
    """One step of a postfix program."""
    op: Op
    symbol: Optional[str] = None

    def __post_init__(self):
        if self.op is Op.LITERAL and self.symbol is None:
            raise ValueError("A literal instruction needs a symbol")
        if self.op is not Op.LITERAL and self.symbol is not None:
            raise ValueError(f"{self.op.value} takes no symbol, got {self.symbol!r}")

    @classmethod
    def parse_postfix(cls, text: str) -> List['Instruction']:
        """
        Parse compact postfix notation.

        ``0`` nothing, ``1`` epsilon, ``.`` concatenate, ``|`` union,
        ``*`` star, a backslash escapes the next character, anything
        else is a literal.

        Raises:
            ValueError: If the text ends in a dangling escape
        """
        instructions = []
        chars = iter(enumerate(text))
        for position, char in chars:
            if char == ESCAPE:
                escaped = next(chars, None)
                if escaped is None:
                    raise ValueError(f"Dangling escape at position {position} in {text!r}")
                instructions.append(cls(Op.LITERAL, escaped[1]))
            elif char in POSTFIX_OPERATORS:
                instructions.append(cls(POSTFIX_OPERATORS[char]))
            else:
                instructions.append(cls(Op.LITERAL, char))
        return instructions

    def __str__(self) -> str:
        if self.op is Op.LITERAL:
            return f"literal({self.symbol!r})"
        return self.op.value


Program = Union[str, Iterable[Instruction]]


def _as_instructions(program: Program) -> List[Instruction]:
    if isinstance(program, str):
        return Instruction.parse_postfix(program)
    return list(program)


def _replay(instructions: List[Instruction], builders: Dict[Op, Callable]):
    stack = []
    for position, instruction in enumerate(instructions):
        op = instruction.op
        if len(stack) < op.arity:
            logger.error(f"{instruction} at position {position} needs {op.arity} operand(s), "
                         f"{len(stack)} available")
            raise InsufficientOperands(
                f"{op.value} at position {position} requires {op.arity} operand(s), "
                f"found {len(stack)}", op.value)

        operands = []
        for _ in range(op.arity):
            try:
                operands.append(stack.pop())
            except IndexError as e:
                raise InternalInvariantViolation(
                    f"Operand stack emptied unexpectedly at position {position}", op.value) from e
        operands.reverse()

        if op is Op.LITERAL:
            stack.append(builders[op](instruction.symbol))
        else:
            stack.append(builders[op](*operands))

    if not stack:
        raise InsufficientOperands("Program produced no fragment to finalize", "finalize")
    if len(stack) > 1:
        logger.error(f"Program left {len(stack)} fragments unconsumed")
        raise AutomatonError(f"Program left {len(stack)} fragments unconsumed", "finalize")
    return stack[0]


def run_program(program: Program, compiler: Optional[Compiler] = None,
                anfa: Optional[ANFA] = None) -> Tuple[ANFA, AutomataRef]:
    """
    Replay a postfix program with one compiler and finalize the result.

    Args:
        program: Instructions, or a compact postfix string
        compiler: Strategy to build with (ForwardCompiler by default)
        anfa: Automaton to extend; a fresh one by default

    Returns:
        The automaton and the ref it was finalized with
    """
    compiler = compiler or ForwardCompiler()
    if anfa is None:
        anfa = compiler.new_automaton()
    instructions = _as_instructions(program)

    builders = {
        Op.NOTHING: lambda: compiler.nothing(anfa),
        Op.EPSILON: lambda: compiler.epsilon(anfa),
        Op.LITERAL: lambda symbol: compiler.literal(anfa, symbol),
        Op.CONCATENATE: lambda a, b: compiler.concatenate(anfa, a, b),
        Op.STAR: lambda a: compiler.star(anfa, a),
        Op.UNION: lambda a, b: compiler.union(anfa, a, b),
    }
    with PerformanceTimer(f"run_program[{compiler.name}] {len(instructions)} instructions"):
        ref = _replay(instructions, builders)
    compiler.finalize(anfa, ref)
    return anfa, ref


def run_dual_program(program: Program, compiler: Optional[BidirectionalCompiler] = None,
                     machines: Optional[DualANFA] = None) -> Tuple[DualANFA, DualRef]:
    """Replay a postfix program in lockstep through a bidirectional compiler."""
    compiler = compiler or BidirectionalCompiler()
    if machines is None:
        machines = compiler.new_automata()
    instructions = _as_instructions(program)

    builders = {
        Op.NOTHING: lambda: compiler.nothing(machines),
        Op.EPSILON: lambda: compiler.epsilon(machines),
        Op.LITERAL: lambda symbol: compiler.literal(machines, symbol),
        Op.CONCATENATE: lambda a, b: compiler.concatenate(machines, a, b),
        Op.STAR: lambda a: compiler.star(machines, a),
        Op.UNION: lambda a, b: compiler.union(machines, a, b),
    }
    with PerformanceTimer(f"run_dual_program {len(instructions)} instructions"):
        ref = _replay(instructions, builders)
    compiler.finalize(machines, ref)
    return machines, ref
