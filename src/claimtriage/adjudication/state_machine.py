"""Claim adjudication state machine.

State diagram:
    SUBMITTED -> APPROVED   (approve)
    SUBMITTED -> DENIED     (deny)

APPROVED and DENIED are terminal. The machine is pure: it validates a decision
against a loaded claim and returns the updated claim plus its audit entry. The
store is responsible for running load, apply and persist in one transaction.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from claimtriage.core.errors import ConflictError, InputError
from claimtriage.core.models import AdjudicationRequest, AuditLogEntry, Claim
from claimtriage.core.types import AuditAction, ClaimStatus, Decision, DenialReasonCode
from claimtriage.core.utils import is_whole_cents, to_cents


logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 500
MIN_EXPLANATION_LENGTH = 20
MAX_EXPLANATION_LENGTH = 1000


@dataclass(frozen=True)
class Transition:
    """A valid state transition."""

    from_status: ClaimStatus
    to_status: ClaimStatus
    decision: Decision
    action: AuditAction


VALID_TRANSITIONS: tuple[Transition, ...] = (
    Transition(ClaimStatus.SUBMITTED, ClaimStatus.APPROVED, Decision.APPROVE, AuditAction.APPROVED),
    Transition(ClaimStatus.SUBMITTED, ClaimStatus.DENIED, Decision.DENY, AuditAction.DENIED),
)


@dataclass(frozen=True)
class AdjudicationOutcome:
    """Updated claim and the audit entry documenting the transition."""

    claim: Claim
    audit_entry: AuditLogEntry


def find_transition(current: ClaimStatus, decision: Decision) -> Transition | None:
    for transition in VALID_TRANSITIONS:
        if transition.from_status == current and transition.decision == decision:
            return transition
    return None


def allowed_decisions(current: ClaimStatus) -> list[Decision]:
    return [t.decision for t in VALID_TRANSITIONS if t.from_status == current]


def is_terminal(status: ClaimStatus) -> bool:
    return not allowed_decisions(status)


def _validate_approval(claim: Claim, request: AdjudicationRequest) -> dict[str, Any]:
    amount = request.approved_amount
    if amount is None or amount <= 0:
        raise InputError(
            "Approved amount must be greater than 0",
            details={"approved_amount": "required and must be greater than 0"},
        )
    if not is_whole_cents(amount):
        raise InputError(
            "Approved amount cannot have more than 2 decimal places",
            details={"approved_amount": "at most 2 decimal places"},
        )
    if amount > claim.billed_amount:
        raise InputError(
            "Approved amount cannot exceed billed amount",
            details={"approved_amount": f"must not exceed billed amount {claim.billed_amount}"},
        )
    if request.notes is not None and len(request.notes) > MAX_NOTES_LENGTH:
        raise InputError(
            f"Notes cannot exceed {MAX_NOTES_LENGTH} characters",
            details={"notes": f"at most {MAX_NOTES_LENGTH} characters"},
        )
    return {
        "approved_amount": to_cents(amount),
        "adjudication_notes": request.notes or None,
    }


def _validate_denial(request: AdjudicationRequest) -> dict[str, Any]:
    code = request.denial_reason_code
    if not code:
        raise InputError(
            "Denial reason code is required",
            details={"denial_reason_code": "required"},
        )
    if code not in {c.value for c in DenialReasonCode}:
        raise InputError(
            "Invalid denial reason code",
            details={"denial_reason_code": f"must be one of {[c.value for c in DenialReasonCode]}"},
        )
    explanation = request.denial_explanation or ""
    if len(explanation) < MIN_EXPLANATION_LENGTH:
        raise InputError(
            f"Denial explanation must be at least {MIN_EXPLANATION_LENGTH} characters",
            details={"denial_explanation": f"at least {MIN_EXPLANATION_LENGTH} characters"},
        )
    if len(explanation) > MAX_EXPLANATION_LENGTH:
        raise InputError(
            f"Denial explanation cannot exceed {MAX_EXPLANATION_LENGTH} characters",
            details={"denial_explanation": f"at most {MAX_EXPLANATION_LENGTH} characters"},
        )
    return {"denial_reason_code": code, "denial_explanation": explanation}


def _audit_details(old_status: ClaimStatus, new_status: ClaimStatus, fields: dict[str, Any]) -> dict[str, Any]:
    details: dict[str, Any] = {"status": new_status.value, "oldStatus": old_status.value}
    if fields.get("approved_amount") is not None:
        details["approvedAmount"] = str(fields["approved_amount"])
        if fields.get("adjudication_notes"):
            details["notes"] = fields["adjudication_notes"]
    if fields.get("denial_reason_code"):
        details["denialReasonCode"] = fields["denial_reason_code"]
        details["denialExplanation"] = fields["denial_explanation"]
    return details


class AdjudicationStateMachine:
    """Validates and applies approve/deny decisions."""

    def apply(
        self,
        claim: Claim,
        request: AdjudicationRequest,
        acting_user_id: str,
        now: datetime,
    ) -> AdjudicationOutcome:
        """Apply ``request`` to ``claim``.

        Raises:
            ConflictError: the claim is no longer ``submitted``.
            InputError: the decision payload is invalid for this claim.
        """
        transition = find_transition(claim.status, request.decision)
        if transition is None:
            raise ConflictError(
                "Claim has already been adjudicated",
                details={"claim_id": claim.id, "status": claim.status.value},
            )

        if request.decision == Decision.APPROVE:
            fields = _validate_approval(claim, request)
        else:
            fields = _validate_denial(request)

        updated = claim.model_copy(
            update={
                "status": transition.to_status,
                "adjudicated_by_user_id": acting_user_id,
                "adjudicated_at": now,
                **fields,
            }
        )
        entry = AuditLogEntry(
            id=uuid.uuid4().hex,
            claim_id=claim.id,
            user_id=acting_user_id,
            action=transition.action,
            old_status=claim.status,
            new_status=transition.to_status,
            details=_audit_details(claim.status, transition.to_status, fields),
            created_at=now,
        )
        logger.debug("Claim %s: %s -> %s", claim.claim_number, claim.status.value, transition.to_status.value)
        return AdjudicationOutcome(claim=updated, audit_entry=entry)
