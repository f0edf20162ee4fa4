"""Claim store interface.

Components receive a store instance instead of opening their own database
handle, so tests and alternative backends can substitute their own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime

    from claimtriage.adjudication.state_machine import AdjudicationOutcome
    from claimtriage.core.models import (
        AuditLogEntry,
        Claim,
        ClaimCreate,
        PriorityResult,
        Provider,
        User,
    )
    from claimtriage.core.types import ClaimStatus, Priority


class ClaimStore(ABC):
    """Persistent record of claims and their audit history."""

    @abstractmethod
    def add_provider(self, provider: Provider) -> Provider: ...

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    @abstractmethod
    def get_provider(self, provider_id: str) -> Provider | None: ...

    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def issue_claim_number(self, day: date) -> str:
        """Issue a claim number in its own write transaction."""
        ...

    @abstractmethod
    def create_claim(
        self,
        submission: ClaimCreate,
        priority: PriorityResult,
        provider_id: str,
        submitted_by_user_id: str,
        submitted_at: datetime,
    ) -> Claim:
        """Atomically issue a claim number, insert the claim and its "submitted" audit entry."""
        ...

    @abstractmethod
    def get_claim(self, claim_id: str) -> Claim | None: ...

    @abstractmethod
    def get_claim_by_number(self, claim_number: str) -> Claim | None: ...

    @abstractmethod
    def adjudicate(self, claim_id: str, apply: Callable[[Claim], AdjudicationOutcome]) -> Claim:
        """Load, transition and persist a claim plus its audit entry as one unit.

        ``apply`` receives the freshly loaded claim inside the transaction and may
        raise to abort it.

        Raises:
            NotFoundError: no claim with ``claim_id``.
        """
        ...

    @abstractmethod
    def list_claims(
        self,
        status: ClaimStatus | None = None,
        priority: Priority | None = None,
        provider_id: str | None = None,
    ) -> list[Claim]: ...

    @abstractmethod
    def audit_trail(self, claim_id: str) -> list[AuditLogEntry]: ...

    @abstractmethod
    def claims_submitted_between(self, start: datetime, end: datetime) -> list[Claim]:
        """Claims with ``start <= submitted_at <= end``, oldest first."""
        ...
