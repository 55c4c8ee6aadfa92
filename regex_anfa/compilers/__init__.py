# regex_anfa/compilers/__init__.py

from .base import Compiler
from .forward_compiler import ForwardCompiler
from .coverage_compiler import CoverageCompiler, CoverageLedger, Provenance
from .bidirectional_compiler import BidirectionalCompiler, DualANFA, DualRef
from .program import Op, Instruction, run_program, run_dual_program

__all__ = [
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
]
