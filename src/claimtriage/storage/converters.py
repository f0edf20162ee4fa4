"""Converters between database rows and model objects."""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from claimtriage.core.models import AuditLogEntry, Claim, Provider, User
from claimtriage.core.types import AuditAction, ClaimStatus, Priority, UserRole
from claimtriage.core.utils import ensure_utc


if TYPE_CHECKING:
    import sqlite3


def dt_to_db(value: datetime) -> str:
    """Fixed-width UTC ISO string, so text comparison matches time order."""
    return ensure_utc(value).isoformat(timespec="microseconds")


def dt_from_db(value: str | None) -> datetime | None:
    return ensure_utc(datetime.fromisoformat(value)) if value else None


def _decimal(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


def row_to_claim(row: sqlite3.Row) -> Claim:
    """Convert database row to Claim object."""
    return Claim(
        id=row["id"],
        claim_number=row["claim_number"],
        provider_id=row["provider_id"],
        submitted_by_user_id=row["submitted_by_user_id"],
        adjudicated_by_user_id=row["adjudicated_by_user_id"],
        patient_first_name=row["patient_first_name"],
        patient_last_name=row["patient_last_name"],
        patient_dob=date.fromisoformat(row["patient_dob"]),
        patient_member_id=row["patient_member_id"],
        cpt_code=row["cpt_code"],
        icd10_code=row["icd10_code"],
        service_date=date.fromisoformat(row["service_date"]),
        billed_amount=Decimal(row["billed_amount"]),
        priority=Priority(row["priority"]),
        priority_confidence=row["priority_confidence"],
        priority_reasoning=row["priority_reasoning"],
        status=ClaimStatus(row["status"]),
        submitted_at=dt_from_db(row["submitted_at"]),
        adjudicated_at=dt_from_db(row["adjudicated_at"]),
        approved_amount=_decimal(row["approved_amount"]),
        adjudication_notes=row["adjudication_notes"],
        denial_reason_code=row["denial_reason_code"],
        denial_explanation=row["denial_explanation"],
    )


def claim_to_params(claim: Claim) -> dict[str, Any]:
    """Named parameters for inserting or updating a claim row."""
    return {
        "id": claim.id,
        "claim_number": claim.claim_number,
        "provider_id": claim.provider_id,
        "submitted_by_user_id": claim.submitted_by_user_id,
        "adjudicated_by_user_id": claim.adjudicated_by_user_id,
        "patient_first_name": claim.patient_first_name,
        "patient_last_name": claim.patient_last_name,
        "patient_dob": claim.patient_dob.isoformat(),
        "patient_member_id": claim.patient_member_id,
        "cpt_code": claim.cpt_code,
        "icd10_code": claim.icd10_code,
        "service_date": claim.service_date.isoformat(),
        "billed_amount": str(claim.billed_amount),
        "priority": claim.priority.value,
        "priority_confidence": claim.priority_confidence,
        "priority_reasoning": claim.priority_reasoning,
        "status": claim.status.value,
        "submitted_at": dt_to_db(claim.submitted_at),
        "adjudicated_at": dt_to_db(claim.adjudicated_at) if claim.adjudicated_at else None,
        "approved_amount": str(claim.approved_amount) if claim.approved_amount is not None else None,
        "adjudication_notes": claim.adjudication_notes,
        "denial_reason_code": claim.denial_reason_code,
        "denial_explanation": claim.denial_explanation,
    }


def row_to_audit_entry(row: sqlite3.Row) -> AuditLogEntry:
    """Convert database row to AuditLogEntry object."""
    return AuditLogEntry(
        id=row["id"],
        claim_id=row["claim_id"],
        user_id=row["user_id"],
        action=AuditAction(row["action"]),
        old_status=ClaimStatus(row["old_status"]) if row["old_status"] else None,
        new_status=ClaimStatus(row["new_status"]),
        details=json.loads(row["details"] or "{}"),
        created_at=dt_from_db(row["created_at"]),
    )


def audit_entry_to_params(entry: AuditLogEntry) -> tuple[Any, ...]:
    return (
        entry.id, entry.claim_id, entry.user_id, entry.action.value,
        entry.old_status.value if entry.old_status else None, entry.new_status.value,
        json.dumps(entry.details), dt_to_db(entry.created_at),
    )


def row_to_user(row: sqlite3.Row) -> User:
    return User(
        id=row["id"], email=row["email"], first_name=row["first_name"],
        last_name=row["last_name"], role=UserRole(row["role"]), provider_id=row["provider_id"],
    )


def row_to_provider(row: sqlite3.Row) -> Provider:
    return Provider(id=row["id"], name=row["name"], npi=row["npi"])
