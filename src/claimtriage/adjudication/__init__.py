"""Claim adjudication."""

from claimtriage.adjudication.state_machine import (
    VALID_TRANSITIONS,
    AdjudicationOutcome,
    AdjudicationStateMachine,
    Transition,
    allowed_decisions,
    is_terminal,
)

__all__ = [
    "VALID_TRANSITIONS",
    "AdjudicationOutcome",
    "AdjudicationStateMachine",
    "Transition",
    "allowed_decisions",
    "is_terminal",
]
