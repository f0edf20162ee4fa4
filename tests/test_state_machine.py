"""Tests for the adjudication state machine."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from claimtriage.adjudication.state_machine import (
    VALID_TRANSITIONS,
    AdjudicationStateMachine,
    allowed_decisions,
    is_terminal,
)
from claimtriage.core.errors import ConflictError, InputError
from claimtriage.core.models import AdjudicationRequest
from claimtriage.core.types import AuditAction, ClaimStatus, Decision
from tests.conftest import ADJUDICATOR, make_claim


NOW = datetime(2026, 3, 2, 15, 30, tzinfo=timezone.utc)
EXPLANATION = "Procedure code does not match the documented diagnosis."


def approve(amount: str | None = "125.00", notes: str | None = None) -> AdjudicationRequest:
    return AdjudicationRequest(
        decision=Decision.APPROVE,
        approved_amount=Decimal(amount) if amount is not None else None,
        notes=notes,
    )


def deny(code: str | None = "INVALID_CPT", explanation: str | None = EXPLANATION) -> AdjudicationRequest:
    return AdjudicationRequest(decision=Decision.DENY, denial_reason_code=code, denial_explanation=explanation)


@pytest.fixture
def machine() -> AdjudicationStateMachine:
    return AdjudicationStateMachine()


class TestTransitionTable:
    def test_only_submitted_has_transitions(self) -> None:
        assert {t.from_status for t in VALID_TRANSITIONS} == {ClaimStatus.SUBMITTED}
        assert set(allowed_decisions(ClaimStatus.SUBMITTED)) == {Decision.APPROVE, Decision.DENY}

    def test_decided_states_are_terminal(self) -> None:
        assert is_terminal(ClaimStatus.APPROVED)
        assert is_terminal(ClaimStatus.DENIED)
        assert not is_terminal(ClaimStatus.SUBMITTED)


class TestApprove:
    def test_approve_sets_decision_fields(self, machine: AdjudicationStateMachine) -> None:
        outcome = machine.apply(make_claim(), approve(notes="Paid per fee schedule"), ADJUDICATOR, NOW)

        claim = outcome.claim
        assert claim.status == ClaimStatus.APPROVED
        assert claim.approved_amount == Decimal("125.00")
        assert claim.adjudication_notes == "Paid per fee schedule"
        assert claim.adjudicated_by_user_id == ADJUDICATOR
        assert claim.adjudicated_at == NOW
        assert claim.denial_reason_code is None

    def test_audit_entry_documents_transition(self, machine: AdjudicationStateMachine) -> None:
        entry = machine.apply(make_claim(), approve(), ADJUDICATOR, NOW).audit_entry
        assert entry.action == AuditAction.APPROVED
        assert entry.old_status == ClaimStatus.SUBMITTED
        assert entry.new_status == ClaimStatus.APPROVED
        assert entry.details["approvedAmount"] == "125.00"
        assert entry.created_at == NOW

    def test_original_claim_untouched(self, machine: AdjudicationStateMachine) -> None:
        claim = make_claim()
        machine.apply(claim, approve(), ADJUDICATOR, NOW)
        assert claim.status == ClaimStatus.SUBMITTED
        assert claim.approved_amount is None

    def test_full_billed_amount_allowed(self, machine: AdjudicationStateMachine) -> None:
        outcome = machine.apply(make_claim(), approve("150.00"), ADJUDICATOR, NOW)
        assert outcome.claim.approved_amount == Decimal("150.00")

    @pytest.mark.parametrize("amount", [None, "0", "-10", "150.01", "0.004", "125.001"])
    def test_invalid_amount(self, machine: AdjudicationStateMachine, amount: str | None) -> None:
        with pytest.raises(InputError) as exc_info:
            machine.apply(make_claim(), approve(amount), ADJUDICATOR, NOW)
        assert "approved_amount" in exc_info.value.details

    def test_sub_cent_amount_never_rounds_to_zero(self, machine: AdjudicationStateMachine) -> None:
        claim = make_claim()
        with pytest.raises(InputError) as exc_info:
            machine.apply(claim, approve("0.004"), ADJUDICATOR, NOW)
        assert exc_info.value.details == {"approved_amount": "at most 2 decimal places"}
        assert claim.status == ClaimStatus.SUBMITTED

    def test_trailing_zeros_beyond_cents_accepted(self, machine: AdjudicationStateMachine) -> None:
        outcome = machine.apply(make_claim(), approve("125.000"), ADJUDICATOR, NOW)
        assert outcome.claim.approved_amount == Decimal("125.00")

    def test_notes_too_long(self, machine: AdjudicationStateMachine) -> None:
        with pytest.raises(InputError):
            machine.apply(make_claim(), approve(notes="x" * 501), ADJUDICATOR, NOW)


class TestDeny:
    def test_deny_sets_reason(self, machine: AdjudicationStateMachine) -> None:
        outcome = machine.apply(make_claim(), deny("NOT_COVERED"), ADJUDICATOR, NOW)
        assert outcome.claim.status == ClaimStatus.DENIED
        assert outcome.claim.denial_reason_code == "NOT_COVERED"
        assert outcome.claim.approved_amount is None
        assert outcome.audit_entry.action == AuditAction.DENIED
        assert outcome.audit_entry.details["denialReasonCode"] == "NOT_COVERED"

    @pytest.mark.parametrize(
        ("code", "explanation", "field"),
        [
            (None, EXPLANATION, "denial_reason_code"),
            ("MISSING_MODIFIER", EXPLANATION, "denial_reason_code"),
            ("OTHER", "Too short", "denial_explanation"),
            ("OTHER", None, "denial_explanation"),
            ("OTHER", "x" * 1001, "denial_explanation"),
        ],
    )
    def test_invalid_denial(
        self, machine: AdjudicationStateMachine, code: str | None, explanation: str | None, field: str
    ) -> None:
        with pytest.raises(InputError) as exc_info:
            machine.apply(make_claim(), deny(code, explanation), ADJUDICATOR, NOW)
        assert field in exc_info.value.details

    def test_explanation_boundaries(self, machine: AdjudicationStateMachine) -> None:
        machine.apply(make_claim(), deny("OTHER", "x" * 20), ADJUDICATOR, NOW)
        machine.apply(make_claim(), deny("OTHER", "x" * 1000), ADJUDICATOR, NOW)


class TestConflict:
    @pytest.mark.parametrize("status", [ClaimStatus.APPROVED, ClaimStatus.DENIED])
    @pytest.mark.parametrize("request_factory", [approve, deny])
    def test_decided_claim_conflicts(
        self, machine: AdjudicationStateMachine, status: ClaimStatus, request_factory: object
    ) -> None:
        decided = make_claim(status=status)
        with pytest.raises(ConflictError, match="already been adjudicated"):
            machine.apply(decided, request_factory(), ADJUDICATOR, NOW)  # type: ignore[operator]

    def test_conflict_checked_before_payload(self, machine: AdjudicationStateMachine) -> None:
        with pytest.raises(ConflictError):
            machine.apply(make_claim(status=ClaimStatus.APPROVED), approve("999999"), ADJUDICATOR, NOW)


class TestAdjudicationRequest:
    def test_unknown_decision_is_input_error(self) -> None:
        with pytest.raises(InputError) as exc_info:
            AdjudicationRequest.from_payload({"decision": "escalate"})
        assert "decision" in exc_info.value.details
