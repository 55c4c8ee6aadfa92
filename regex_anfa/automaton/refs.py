# regex_anfa/automaton/refs.py

import operator
from typing import NamedTuple

from regex_anfa.automaton.delta import QId


class AutomataRef(NamedTuple):
    """
    Entry and exit states of one constructed fragment.

    The exit state ``f`` stays EMPTY until a composition operator patches
    it; a ref whose exit has been patched is consumed and must not be
    composed again.
    """
    q0: QId
    f: QId

    @classmethod
    def of(cls, q0, f) -> 'AutomataRef':
        """
        Build a ref from any integral indices, e.g. values read back from
        ``to_frame()``.

        Raises:
            TypeError: If either index is not integral
        """
        return cls(operator.index(q0), operator.index(f))

    def __str__(self) -> str:
        return f"[{self.q0}, {self.f}]"
