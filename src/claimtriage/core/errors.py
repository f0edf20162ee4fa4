"""Exception hierarchy for claim processing.

Every error carries a stable ``code`` so callers can render a specific message
without matching on exception text.
"""

from __future__ import annotations

from typing import Any


class ClaimTriageError(Exception):
    """Base class for all claim processing errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the error envelope used by callers."""
        return {"code": self.code, "message": self.message, "details": self.details}


class InputError(ClaimTriageError):
    """Malformed or missing input. Never retried."""

    code = "VALIDATION_ERROR"


class NotFoundError(ClaimTriageError):
    """Referenced entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(ClaimTriageError):
    """Claim is not in a state that allows the requested transition."""

    code = "CONFLICT"


class ForbiddenError(ClaimTriageError):
    """Acting user may not perform the operation."""

    code = "FORBIDDEN"


class OracleError(ClaimTriageError):
    """Priority oracle timed out, failed, or answered with garbage.

    Raised inside the classifier only; it is always converted to a fallback result.
    """

    code = "EXTERNAL_SERVICE_DEGRADED"


class StorageError(ClaimTriageError):
    """Underlying persistence call failed."""

    code = "STORAGE_FAILURE"


class SequenceExhaustedError(StorageError):
    """More than 9999 claim numbers were requested for one day."""

    code = "SEQUENCE_EXHAUSTED"
