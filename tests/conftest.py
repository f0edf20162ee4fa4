"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import pytest

from claimtriage.classification.classifier import PriorityClassifier
from claimtriage.config.settings import Settings
from claimtriage.core.mock_llm import MockLLMClient
from claimtriage.core.models import Claim
from claimtriage.core.types import ClaimStatus, Priority
from claimtriage.orchestrator.pipeline import ClaimPipeline
from claimtriage.storage.repository import SQLiteClaimStore
from claimtriage.storage.seed import seed_sample_data


if TYPE_CHECKING:
    from pathlib import Path

ENV_VARS = (
    "LLM_PROVIDER",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "AI_CATEGORIZATION_MODEL",
    "AI_CATEGORIZATION_MAX_TOKENS",
    "LOG_LEVEL",
    "AI_CATEGORIZATION_ENABLED",
    "AI_CATEGORIZATION_TIMEOUT",
    "CLAIMS_DB_PATH",
)

PROVIDER_USER = "user-sjones"
ADJUDICATOR = "user-mwilliams"
SECOND_ADJUDICATOR = "user-lchen"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of Settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    s = Settings(_env_file=None)
    s.storage.db_path = str(tmp_path / "claims.db")
    s.classification.timeout_ms = 2000
    return s


@pytest.fixture
def store(settings: Settings) -> SQLiteClaimStore:
    """Temporary claim store seeded with sample providers and users."""
    s = SQLiteClaimStore(settings.storage.db_path, busy_timeout=settings.storage.busy_timeout_seconds)
    seed_sample_data(s)
    return s


@pytest.fixture
def mock_llm() -> MockLLMClient:
    return MockLLMClient()


@pytest.fixture
def classifier(settings: Settings, mock_llm: MockLLMClient) -> PriorityClassifier:
    return PriorityClassifier(settings, llm=mock_llm)


@pytest.fixture
def pipeline(settings: Settings, store: SQLiteClaimStore, classifier: PriorityClassifier) -> ClaimPipeline:
    return ClaimPipeline(settings, store=store, classifier=classifier)


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def claim_payload(
    cpt: str = "99213",
    icd10: str = "E11.9",
    amount: str | float = "150.00",
    dob: str = "1965-04-12",
) -> dict[str, Any]:
    """Claim submission in the camelCase shape callers send."""
    return {
        "patient": {"firstName": "Maria", "lastName": "Lopez", "dateOfBirth": dob, "memberId": "HUM-448812"},
        "service": {"cptCode": cpt, "icd10Code": icd10, "serviceDate": "2026-02-27", "billedAmount": amount},
    }


def make_claim(**overrides: Any) -> Claim:
    """Standalone Claim for tests that don't need a store."""
    fields: dict[str, Any] = {
        "id": "claim-1",
        "claim_number": "CLM-20260302-0001",
        "provider_id": "prov-lpcc",
        "submitted_by_user_id": PROVIDER_USER,
        "patient_first_name": "Maria",
        "patient_last_name": "Lopez",
        "patient_dob": date(1965, 4, 12),
        "patient_member_id": "HUM-448812",
        "cpt_code": "99213",
        "icd10_code": "E11.9",
        "service_date": date(2026, 2, 27),
        "billed_amount": Decimal("150.00"),
        "priority": Priority.STANDARD,
        "priority_confidence": 0.76,
        "priority_reasoning": "Moderate-cost office visit.",
        "status": ClaimStatus.SUBMITTED,
        "submitted_at": datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Claim(**fields)
