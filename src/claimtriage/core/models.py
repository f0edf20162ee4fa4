"""Data models for claim intake, adjudication and audit."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from claimtriage.core.errors import InputError
from claimtriage.core.types import (  # noqa: TC001 - Pydantic needs at runtime
    AuditAction,
    ClaimStatus,
    Decision,
    Priority,
    UserRole,
)
from claimtriage.core.utils import is_whole_cents, to_cents, utcnow, validation_details


class Provider(BaseModel):
    """A billing provider organization."""
    id: str
    name: str
    npi: str


class User(BaseModel):
    """An authenticated account acting on claims."""
    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    provider_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_ref(self) -> UserRef:
        return UserRef(id=self.id, name=self.full_name, email=self.email)


class UserRef(BaseModel):
    """Resolved identity shown next to a claim action."""
    id: str
    name: str
    email: str

    model_config = {"frozen": True}


class PatientInfo(BaseModel):
    """Patient identity section of a claim submission."""
    first_name: str = Field(min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(min_length=1, max_length=100, alias="lastName")
    date_of_birth: date = Field(alias="dateOfBirth")
    member_id: str = Field(min_length=1, max_length=50, alias="memberId")

    model_config = {"populate_by_name": True}

    @field_validator("date_of_birth")
    @classmethod
    def _not_future(cls, value: date) -> date:
        if value > utcnow().date():
            msg = "must not be in the future"
            raise ValueError(msg)
        return value


class ServiceInfo(BaseModel):
    """Billed service section of a claim submission."""
    cpt_code: str = Field(min_length=1, max_length=10, alias="cptCode")
    icd10_code: str = Field(min_length=1, max_length=10, alias="icd10Code")
    service_date: date = Field(alias="serviceDate")
    billed_amount: Decimal = Field(gt=0, alias="billedAmount")

    model_config = {"populate_by_name": True}

    @field_validator("cpt_code", "icd10_code")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("billed_amount")
    @classmethod
    def _cents(cls, value: Decimal) -> Decimal:
        if not is_whole_cents(value):
            msg = "must have at most 2 decimal places"
            raise ValueError(msg)
        return to_cents(value)


class ClaimCreate(BaseModel):
    """Already-shaped claim submission."""
    patient: PatientInfo
    service: ServiceInfo

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ClaimCreate:
        """Validate a raw payload, raising InputError with per-field details."""
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InputError("Invalid input data", details=validation_details(e)) from e


class PriorityResult(BaseModel):
    """Outcome of priority classification. Never recomputed after intake."""
    priority: Priority
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = Field(min_length=1)

    model_config = {"frozen": True}


class Claim(BaseModel):
    """A single billed healthcare service and its coverage decision."""
    id: str
    claim_number: str
    provider_id: str
    submitted_by_user_id: str
    adjudicated_by_user_id: str | None = None

    patient_first_name: str
    patient_last_name: str
    patient_dob: date
    patient_member_id: str

    cpt_code: str
    icd10_code: str
    service_date: date
    billed_amount: Decimal

    priority: Priority
    priority_confidence: float = Field(ge=0.0, le=1.0)
    priority_reasoning: str = Field(min_length=1)

    status: ClaimStatus = ClaimStatus.SUBMITTED
    submitted_at: datetime = Field(default_factory=utcnow)
    adjudicated_at: datetime | None = None
    approved_amount: Decimal | None = None
    adjudication_notes: str | None = None
    denial_reason_code: str | None = None
    denial_explanation: str | None = None

    @property
    def patient_name(self) -> str:
        return f"{self.patient_first_name} {self.patient_last_name}"

    @property
    def is_decided(self) -> bool:
        return self.status in (ClaimStatus.APPROVED, ClaimStatus.DENIED)

    @property
    def hours_to_decision(self) -> float | None:
        if self.adjudicated_at is None:
            return None
        return (self.adjudicated_at - self.submitted_at).total_seconds() / 3600


class AuditLogEntry(BaseModel):
    """Immutable record of one claim state transition."""
    id: str
    claim_id: str
    user_id: str
    action: AuditAction
    old_status: ClaimStatus | None = None
    new_status: ClaimStatus
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)

    model_config = {"frozen": True}


class AdjudicationRequest(BaseModel):
    """Approve/deny payload supplied by an adjudicator."""
    decision: Decision
    approved_amount: Decimal | None = None
    notes: str | None = None
    denial_reason_code: str | None = None
    denial_explanation: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AdjudicationRequest:
        """Validate a raw payload, raising InputError with per-field details."""
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InputError("Invalid adjudication request", details=validation_details(e)) from e


class AdjudicationSummary(BaseModel):
    """Updated claim returned to the adjudicator."""
    id: str
    claim_number: str
    status: ClaimStatus
    approved_amount: Decimal | None = None
    denial_reason_code: str | None = None
    denial_explanation: str | None = None
    adjudication_notes: str | None = None
    adjudicated_by: UserRef
    adjudicated_at: datetime


class ClaimSummary(BaseModel):
    """Row in a claims listing."""
    id: str
    claim_number: str
    status: ClaimStatus
    priority: Priority
    priority_confidence: float
    patient_name: str
    service_date: date
    billed_amount: Decimal
    approved_amount: Decimal | None = None
    provider_name: str
    submitted_at: datetime
    adjudicated_at: datetime | None = None
    days_since_submission: int


class AuditTrailItem(BaseModel):
    """Audit entry with the acting user resolved."""
    action: AuditAction
    performed_by: str
    old_status: ClaimStatus | None = None
    new_status: ClaimStatus
    timestamp: datetime
    details: dict[str, Any] = Field(default_factory=dict)


class ClaimDetail(BaseModel):
    """A claim with resolved parties and its audit trail."""
    claim: Claim
    provider: Provider
    submitted_by: UserRef
    adjudicated_by: UserRef | None = None
    audit_trail: list[AuditTrailItem] = Field(default_factory=list)
