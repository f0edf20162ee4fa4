"""Core type definitions and enums."""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias


# Type aliases for clarity
JSON: TypeAlias = dict[str, "JSONValue"]
JSONValue: TypeAlias = str | int | float | bool | None | list["JSONValue"] | JSON


class Priority(str, Enum):
    """Processing priority tiers assigned at intake."""

    URGENT = "URGENT"
    STANDARD = "STANDARD"
    ROUTINE = "ROUTINE"


class ClaimStatus(str, Enum):
    """Lifecycle states handled by the adjudication state machine."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    DENIED = "denied"


class Decision(str, Enum):
    """Adjudication decisions an adjudicator can take."""

    APPROVE = "approve"
    DENY = "deny"


class AuditAction(str, Enum):
    """Actions recorded in the audit log."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    DENIED = "denied"


class DenialReasonCode(str, Enum):
    """Closed set of denial reasons."""

    INVALID_CPT = "INVALID_CPT"
    INVALID_DIAGNOSIS = "INVALID_DIAGNOSIS"
    NOT_COVERED = "NOT_COVERED"
    PATIENT_INELIGIBLE = "PATIENT_INELIGIBLE"
    DUPLICATE_CLAIM = "DUPLICATE_CLAIM"
    INSUFFICIENT_DOCS = "INSUFFICIENT_DOCS"
    OTHER = "OTHER"


class UserRole(str, Enum):
    """Roles a user account can hold."""

    ADMIN = "admin"
    PROVIDER_STAFF = "provider_staff"
    PAYER_PROCESSOR = "payer_processor"


class MessageRole(str, Enum):
    """Roles for messages sent to the priority oracle."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


# Priorities in report order
PRIORITIES: tuple[Priority, ...] = (Priority.URGENT, Priority.STANDARD, Priority.ROUTINE)
