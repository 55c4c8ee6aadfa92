# regex_anfa/compilers/coverage_compiler.py
"""
Coverage compiler: a provenance-annotated twin of the forward automaton.

Each logical operation applied to an automaton gets a sequence number.
Every state the operation appends is attributed to it, and every dangling
exit it patches records which operation patched it. Concatenation appends
a junction state between the two fragments so that each concatenation
owns a state of its own; the other operations mirror Thompson's
construction. The automaton accepts the same language as the forward one
but is laid out differently, so its refs must never be mixed with refs
from a forward automaton.
"""

import weakref
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from regex_anfa.automaton.anfa import ANFA
from regex_anfa.automaton.delta import QId, Transition
from regex_anfa.automaton.refs import AutomataRef
from regex_anfa.compilers.base import Compiler
from regex_anfa.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Provenance:
    """Which operation created a state, and which one later patched it."""
    op_index: int
    op: str
    patched_by: Optional[int] = None


@dataclass
class CoverageLedger:
    """Provenance records of one automaton."""
    operations: List[str] = field(default_factory=list)
    records: Dict[QId, Provenance] = field(default_factory=dict)


class CoverageCompiler(Compiler):
    """Builds an automaton whose states can be traced back to operations."""

    name = "coverage"

    def __init__(self, config=None):
        super().__init__(config)
        self._ledgers: 'weakref.WeakKeyDictionary[ANFA, CoverageLedger]' = weakref.WeakKeyDictionary()

    def ledger(self, anfa: ANFA) -> CoverageLedger:
        if anfa not in self._ledgers:
            self._ledgers[anfa] = CoverageLedger()
        return self._ledgers[anfa]

    def operations(self, anfa: ANFA) -> int:
        """Number of logical operations applied to ``anfa`` so far."""
        return len(self.ledger(anfa).operations)

    def provenance(self, anfa: ANFA, qid: QId) -> Optional[Provenance]:
        return self.ledger(anfa).records.get(qid)

    def provenance_frame(self, anfa: ANFA) -> pd.DataFrame:
        """One row per attributed state: q, op_index, op, patched_by."""
        rows = [
            {'q': qid, 'op_index': p.op_index, 'op': p.op, 'patched_by': p.patched_by}
            for qid, p in sorted(self.ledger(anfa).records.items())
        ]
        frame = pd.DataFrame(rows, columns=['q', 'op_index', 'op', 'patched_by'])
        frame['patched_by'] = frame['patched_by'].astype('Int64')
        return frame

    def _record(self, anfa: ANFA, op: str, first_new: QId, patched=()) -> None:
        ledger = self.ledger(anfa)
        op_index = len(ledger.operations)
        ledger.operations.append(op)
        for qid in range(first_new, len(anfa.delta)):
            ledger.records[qid] = Provenance(op_index, op)
        for qid in patched:
            # States built outside this compiler have no record yet.
            record = ledger.records.setdefault(qid, Provenance(-1, "external"))
            record.patched_by = op_index
        logger.debug(f"coverage op #{op_index} {op}: new states [{first_new}, {len(anfa.delta)}), "
                     f"patched {list(patched)}")

    def nothing(self, anfa: ANFA) -> AutomataRef:
        first_new = len(anfa.delta)
        ref = anfa.expr_nothing()
        self._record(anfa, "nothing", first_new)
        return ref

    def epsilon(self, anfa: ANFA) -> AutomataRef:
        first_new = len(anfa.delta)
        ref = anfa.expr_epsilon()
        self._record(anfa, "epsilon", first_new)
        return ref

    def literal(self, anfa: ANFA, symbol: str) -> AutomataRef:
        first_new = len(anfa.delta)
        ref = anfa.expr_literal(symbol)
        self._record(anfa, f"literal({symbol!r})", first_new)
        return ref

    def concatenate(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        a, b = anfa.check_operands("concatenate", a, b)
        anfa.delta.reserve(1)
        first_new = len(anfa.delta)
        junction = anfa.delta.append(Transition.single(b.q0))
        anfa.delta.patch(a.f, Transition.single(junction))
        self._record(anfa, "concatenate", first_new, (a.f,))
        return AutomataRef(a.q0, b.f)

    def star(self, anfa: ANFA, a: AutomataRef) -> AutomataRef:
        first_new = len(anfa.delta)
        ref = anfa.star(a)
        self._record(anfa, "star", first_new, (a.f,))
        return ref

    def union(self, anfa: ANFA, a: AutomataRef, b: AutomataRef) -> AutomataRef:
        first_new = len(anfa.delta)
        ref = anfa.union(a, b)
        self._record(anfa, "union", first_new, (a.f, b.f))
        return ref
