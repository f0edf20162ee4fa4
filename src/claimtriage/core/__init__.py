"""Core module - shared models, errors and the LLM client abstraction."""

from __future__ import annotations

from claimtriage.core.errors import (
    ClaimTriageError,
    ConflictError,
    ForbiddenError,
    InputError,
    NotFoundError,
    OracleError,
    SequenceExhaustedError,
    StorageError,
)
from claimtriage.core.llm import LLMClient
from claimtriage.core.response import LLMResponse, TokenUsage
from claimtriage.core.types import ClaimStatus, Decision, DenialReasonCode, Priority


__all__ = [
    # Errors
    "ClaimTriageError",
    "ClaimStatus",
    "ConflictError",
    "Decision",
    "DenialReasonCode",
    "ForbiddenError",
    "InputError",
    # LLM
    "LLMClient",
    "LLMResponse",
    "NotFoundError",
    "OracleError",
    # Types
    "Priority",
    "SequenceExhaustedError",
    "StorageError",
    "TokenUsage",
]
