"""Claim pipeline: intake, classification, adjudication and lookups."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from claimtriage.adjudication.state_machine import AdjudicationStateMachine
from claimtriage.classification.classifier import PriorityClassifier
from claimtriage.config.settings import Settings
from claimtriage.core.errors import ForbiddenError, InputError, NotFoundError
from claimtriage.core.llm import LLMClient
from claimtriage.core.models import (
    AdjudicationRequest,
    AdjudicationSummary,
    AuditTrailItem,
    ClaimCreate,
    ClaimDetail,
    ClaimSummary,
)
from claimtriage.core.utils import ensure_utc, utcnow
from claimtriage.storage.repository import SQLiteClaimStore


if TYPE_CHECKING:
    from datetime import datetime

    from claimtriage.core.models import Claim, Provider, User, UserRef
    from claimtriage.core.types import ClaimStatus, Priority
    from claimtriage.storage.base import ClaimStore

logger = logging.getLogger(__name__)


class ClaimPipeline:
    """Orchestrates claim intake and adjudication against one store."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: ClaimStore | None = None,
        classifier: PriorityClassifier | None = None,
        mock: bool = False,
    ) -> None:
        if settings is None:
            settings = Settings()
        self.settings = settings
        self.store = store or SQLiteClaimStore(
            settings.storage.db_path, busy_timeout=settings.storage.busy_timeout_seconds
        )
        if classifier is None:
            llm = LLMClient.create(settings, mock=True) if mock else None
            classifier = PriorityClassifier(settings, llm=llm)
        self.classifier = classifier
        self.state_machine = AdjudicationStateMachine()

    def _require_user(self, user_id: str) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found", details={"user_id": user_id})
        return user

    def _user_ref(self, user_id: str) -> UserRef:
        return self._require_user(user_id).to_ref()

    def _require_claim(self, claim_id: str) -> Claim:
        claim = self.store.get_claim(claim_id)
        if claim is None:
            raise NotFoundError("Claim not found", details={"claim_id": claim_id})
        return claim

    async def submit_claim(
        self,
        payload: ClaimCreate | dict[str, Any],
        user_id: str,
        now: datetime | None = None,
    ) -> Claim:
        """Validate, classify and persist a new claim.

        The oracle is consulted before the write transaction opens, so a slow
        oracle never holds the store's write lock. Store calls run in a worker
        thread so a write waiting on the lock does not stall the event loop.

        Raises:
            InputError: the payload is malformed.
            NotFoundError: ``user_id`` is unknown.
            ForbiddenError: the user is not linked to a provider.
        """
        submission = payload if isinstance(payload, ClaimCreate) else ClaimCreate.from_payload(payload)
        user = await asyncio.to_thread(self._require_user, user_id)
        if not user.provider_id:
            raise ForbiddenError("User is not associated with a provider", details={"user_id": user_id})

        submitted_at = ensure_utc(now) if now else utcnow()
        if submission.patient.date_of_birth > submitted_at.date():
            raise InputError(
                "Invalid input data",
                details={"patient.dateOfBirth": "must not be after the submission date"},
            )
        result = await self.classifier.classify_claim(submission, today=submitted_at.date())
        claim = await asyncio.to_thread(
            self.store.create_claim,
            submission,
            result,
            provider_id=user.provider_id,
            submitted_by_user_id=user.id,
            submitted_at=submitted_at,
        )
        logger.info(
            "Claim %s submitted by %s (priority=%s, confidence=%.2f)",
            claim.claim_number, user.email, claim.priority.value, claim.priority_confidence,
        )
        return claim

    def adjudicate(
        self,
        claim_id: str,
        payload: AdjudicationRequest | dict[str, Any],
        user_id: str,
        now: datetime | None = None,
    ) -> AdjudicationSummary:
        """Approve or deny a submitted claim.

        Raises:
            InputError: the decision payload is invalid.
            NotFoundError: the claim or user is unknown.
            ConflictError: the claim was already decided.
        """
        request = payload if isinstance(payload, AdjudicationRequest) else AdjudicationRequest.from_payload(payload)
        adjudicator = self._user_ref(user_id)
        decided_at = ensure_utc(now) if now else utcnow()

        claim = self.store.adjudicate(
            claim_id,
            lambda current: self.state_machine.apply(current, request, adjudicator.id, decided_at),
        )
        logger.info("Claim %s %s by %s", claim.claim_number, claim.status.value, adjudicator.email)
        return AdjudicationSummary(
            id=claim.id,
            claim_number=claim.claim_number,
            status=claim.status,
            approved_amount=claim.approved_amount,
            denial_reason_code=claim.denial_reason_code,
            denial_explanation=claim.denial_explanation,
            adjudication_notes=claim.adjudication_notes,
            adjudicated_by=adjudicator,
            adjudicated_at=claim.adjudicated_at or decided_at,
        )

    def get_claim_detail(self, claim_id: str) -> ClaimDetail:
        """A claim with its provider, resolved parties and audit trail."""
        claim = self._require_claim(claim_id)
        provider = self.store.get_provider(claim.provider_id)
        if provider is None:
            raise NotFoundError("Provider not found", details={"provider_id": claim.provider_id})

        names: dict[str, str] = {}
        trail = []
        for entry in self.store.audit_trail(claim.id):
            if entry.user_id not in names:
                names[entry.user_id] = self._user_ref(entry.user_id).name
            trail.append(
                AuditTrailItem(
                    action=entry.action,
                    performed_by=names[entry.user_id],
                    old_status=entry.old_status,
                    new_status=entry.new_status,
                    timestamp=entry.created_at,
                    details=entry.details,
                )
            )

        return ClaimDetail(
            claim=claim,
            provider=provider,
            submitted_by=self._user_ref(claim.submitted_by_user_id),
            adjudicated_by=self._user_ref(claim.adjudicated_by_user_id) if claim.adjudicated_by_user_id else None,
            audit_trail=trail,
        )

    def find_claim(self, claim_ref: str) -> Claim:
        """Look up a claim by id or by claim number."""
        claim = self.store.get_claim(claim_ref)
        if claim is None:
            claim = self.store.get_claim_by_number(claim_ref)
        if claim is None:
            raise NotFoundError("Claim not found", details={"claim": claim_ref})
        return claim

    def list_claims(
        self,
        status: ClaimStatus | None = None,
        priority: Priority | None = None,
        provider_id: str | None = None,
        now: datetime | None = None,
    ) -> list[ClaimSummary]:
        """Claims matching the filters, newest first."""
        now = ensure_utc(now) if now else utcnow()
        providers: dict[str, Provider | None] = {}
        summaries = []
        for claim in self.store.list_claims(status=status, priority=priority, provider_id=provider_id):
            if claim.provider_id not in providers:
                providers[claim.provider_id] = self.store.get_provider(claim.provider_id)
            provider = providers[claim.provider_id]
            summaries.append(
                ClaimSummary(
                    id=claim.id,
                    claim_number=claim.claim_number,
                    status=claim.status,
                    priority=claim.priority,
                    priority_confidence=claim.priority_confidence,
                    patient_name=claim.patient_name,
                    service_date=claim.service_date,
                    billed_amount=claim.billed_amount,
                    approved_amount=claim.approved_amount,
                    provider_name=provider.name if provider else "Unknown",
                    submitted_at=claim.submitted_at,
                    adjudicated_at=claim.adjudicated_at,
                    days_since_submission=(now - claim.submitted_at).days,
                )
            )
        return summaries
