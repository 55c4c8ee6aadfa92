# regex_anfa/automaton/delta.py
"""
The state table of an automaton under construction.

Each state is an index (QId) into an append-only list of transition
records. A record is one of three shapes:

    EMPTY   no outgoing edge; also the unpatched exit of a fragment
    SINGLE  one edge, labeled with a symbol or unlabeled (epsilon)
    FORK    two unlabeled edges; the only source of branching

Records are never removed and indices are never reused, so a QId handed
out once stays valid for the lifetime of the table.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import pandas as pd

from regex_anfa.errors import InternalInvariantViolation, StateLimitExceeded
from regex_anfa.utils.logging_config import get_logger

logger = get_logger(__name__)

# Unique state id
QId = int


class TransitionKind(Enum):
    """Shape of a transition record."""
    EMPTY = "EMPTY"
    SINGLE = "SINGLE"
    FORK = "FORK"


@dataclass(frozen=True)
class Transition:
    """
    Outgoing edges of a single state.

    Attributes:
        kind: Shape of the record
        label: Symbol consumed by a SINGLE edge, None for epsilon
        targets: Destination states, ordered; empty for EMPTY

    Raises:
        ValueError: If the record breaks the two-edge invariant
    """
    kind: TransitionKind
    label: Optional[str] = None
    targets: Tuple[QId, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'targets', tuple(operator.index(t) for t in self.targets))
        if any(t < 0 for t in self.targets):
            raise ValueError(f"Transition targets must be non-negative, got {self.targets}")

        if self.kind is TransitionKind.EMPTY:
            if self.targets or self.label is not None:
                raise ValueError("An empty transition has no label and no targets")
        elif self.kind is TransitionKind.SINGLE:
            if len(self.targets) != 1:
                raise ValueError(f"A single transition has exactly one target, got {len(self.targets)}")
        elif self.kind is TransitionKind.FORK:
            if len(self.targets) != 2:
                raise ValueError(f"A fork has exactly two targets, got {len(self.targets)}")
            if self.label is not None:
                raise ValueError(f"A fork is unlabeled, got label {self.label!r}")

    @classmethod
    def empty(cls) -> 'Transition':
        return cls(TransitionKind.EMPTY)

    @classmethod
    def single(cls, target: QId, label: Optional[str] = None) -> 'Transition':
        return cls(TransitionKind.SINGLE, label, (target,))

    @classmethod
    def fork(cls, first: QId, second: QId) -> 'Transition':
        return cls(TransitionKind.FORK, None, (first, second))

    @property
    def is_empty(self) -> bool:
        return self.kind is TransitionKind.EMPTY

    @property
    def is_epsilon(self) -> bool:
        """True when every edge of this record is unlabeled."""
        return not self.is_empty and self.label is None

    def __str__(self) -> str:
        if self.is_empty:
            return "-"
        label = "ε" if self.label is None else repr(self.label)
        return f"{label} -> {', '.join(str(t) for t in self.targets)}"


class Delta:
    """
    Append-only table of transition records indexed by QId.

    Args:
        max_states: Optional upper bound on the number of states
    """

    def __init__(self, max_states: Optional[int] = None):
        self._records: List[Transition] = []
        self.max_states = max_states

    def append(self, transition: Transition) -> QId:
        """Append a record and return the QId of the new state."""
        if self.max_states is not None and len(self._records) >= self.max_states:
            logger.error(f"State table is full at {self.max_states} states")
            raise StateLimitExceeded(self.max_states)
        self._records.append(transition)
        return len(self._records) - 1

    def reserve(self, count: int) -> None:
        """
        Fail early when ``count`` more states would not fit.

        Builders call this before appending so a multi-state step either
        appends all of its states or none.
        """
        if self.max_states is not None and len(self._records) + count > self.max_states:
            logger.error(f"Cannot append {count} states to a table of {len(self._records)} "
                         f"(limit {self.max_states})")
            raise StateLimitExceeded(self.max_states)

    def patch(self, qid: QId, transition: Transition) -> None:
        """
        Replace the EMPTY record at ``qid``.

        Raises:
            InternalInvariantViolation: If the slot is already patched
        """
        if not self.is_empty(qid):
            logger.error(f"Attempted to patch state {qid} which already has {self._records[qid]}")
            raise InternalInvariantViolation(f"State {qid} is not empty and cannot be patched", "patch")
        self._records[qid] = transition
        logger.debug(f"Patched state {qid}: {transition}")

    def is_empty(self, qid: QId) -> bool:
        return self._records[qid].is_empty

    def targets(self, qid: QId) -> Tuple[QId, ...]:
        return self._records[qid].targets

    def __getitem__(self, qid: QId) -> Transition:
        return self._records[qid]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._records)

    def __contains__(self, qid) -> bool:
        try:
            index = operator.index(qid)
        except TypeError:
            return False
        return 0 <= index < len(self._records)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Delta):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"Delta({len(self._records)} states)"

    def to_frame(self) -> pd.DataFrame:
        """
        Tabular view of the state table, one row per state.

        Columns: q, kind, label, targets.
        """
        rows = [
            {
                'q': qid,
                'kind': record.kind.value,
                'label': record.label,
                'targets': record.targets,
            }
            for qid, record in enumerate(self._records)
        ]
        return pd.DataFrame(rows, columns=['q', 'kind', 'label', 'targets'])
