# regex_anfa/__init__.py
"""
Thompson construction of NFA fragments for a regex compilation pipeline.
"""

from .automaton import QId, Transition, TransitionKind, Delta, AutomataRef, ANFA
from .compilers import (
    Compiler, ForwardCompiler, CoverageCompiler, CoverageLedger, Provenance,
    BidirectionalCompiler, DualANFA, DualRef,
    Op, Instruction, run_program, run_dual_program,
)
from .config import AutomatonConfig
from .errors import (
    AutomatonError, InsufficientOperands, DanglingStateViolation,
    InternalInvariantViolation, StateLimitExceeded,
)

__version__ = "0.1.0"

__all__ = [
    'QId',
    'Transition',
    'TransitionKind',
    'Delta',
    'AutomataRef',
    'ANFA',
    'Compiler',
    'ForwardCompiler',
    'CoverageCompiler',
    'CoverageLedger',
    'Provenance',
    'BidirectionalCompiler',
    'DualANFA',
    'DualRef',
    'Op',
    'Instruction',
    'run_program',
    'run_dual_program',
    'AutomatonConfig',
    'AutomatonError',
    'InsufficientOperands',
    'DanglingStateViolation',
    'InternalInvariantViolation',
    'StateLimitExceeded',
]
