# regex_anfa/automaton/__init__.py

from .delta import QId, Transition, TransitionKind, Delta
from .refs import AutomataRef
from .anfa import ANFA

__all__ = [
    'QId',
    'Transition',
    'TransitionKind',
    'Delta',
    'AutomataRef',
    'ANFA',
]
