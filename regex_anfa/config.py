# regex_anfa/config.py

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class AutomatonConfig:
    """Configuration for automaton construction"""
    validate_symbols: bool = True
    max_states: Optional[int] = None

    def __post_init__(self):
        if self.max_states is not None and self.max_states <= 0:
            raise ValueError(f"max_states must be positive, got {self.max_states}")

    @classmethod
    def from_env(cls) -> 'AutomatonConfig':
        """
        Build a configuration from environment variables.

        REGEX_ANFA_VALIDATE_SYMBOLS: "false" disables literal symbol checks
        REGEX_ANFA_MAX_STATES: positive integer bound on the state table
        """
        validate = os.getenv('REGEX_ANFA_VALIDATE_SYMBOLS', 'true').lower() != 'false'
        raw_limit = os.getenv('REGEX_ANFA_MAX_STATES', '').strip()
        try:
            max_states = int(raw_limit) if raw_limit else None
        except ValueError as e:
            raise ValueError(f"REGEX_ANFA_MAX_STATES must be an integer, got '{raw_limit}'") from e
        return cls(validate_symbols=validate, max_states=max_states)
