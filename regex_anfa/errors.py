# regex_anfa/errors.py
"""
Error taxonomy for automaton construction.

All of these signal caller misuse or an impossible internal condition;
none are transient, so none are retried. A caller that sees one must
abandon the current build and must not compose the refs involved again.
"""

from typing import Optional


class AutomatonError(Exception):
    """Base class for automaton construction errors with operation context."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        # Set by the bidirectional compiler to "forward" or "coverage".
        self.side: Optional[str] = None
        super().__init__(f"[{operation}] {message}" if operation else message)


class InsufficientOperands(AutomatonError):
    """A composition operator ran without the one or two live refs it needs."""
    pass


class DanglingStateViolation(AutomatonError):
    """An operand's final state already carries a transition."""

    def __init__(self, message: str, qid: Optional[int] = None, operation: Optional[str] = None):
        self.qid = qid
        super().__init__(message, operation)


class InternalInvariantViolation(AutomatonError):
    """An internal condition that correct call sequencing makes impossible."""
    pass


class StateLimitExceeded(AutomatonError):
    """Appending a state would grow the table past the configured bound."""

    def __init__(self, limit: int, operation: Optional[str] = None):
        self.limit = limit
        super().__init__(f"State table limit of {limit} states exceeded", operation)
