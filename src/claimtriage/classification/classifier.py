"""Priority classification with an LLM oracle and deterministic fallbacks.

The oracle is advisory: every failure mode (disabled, unconfigured, timeout,
transport error, malformed answer) turns into a STANDARD result with zero
confidence, so claim intake never depends on the oracle being up.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from claimtriage.classification.prompt import SYSTEM_PROMPT, build_categorization_prompt
from claimtriage.config.settings import CostThresholds, Settings
from claimtriage.core.errors import InputError, OracleError
from claimtriage.core.llm import LLMClient
from claimtriage.core.models import PriorityResult
from claimtriage.core.types import MessageRole, Priority
from claimtriage.core.utils import calculate_age, extract_json_from_response


if TYPE_CHECKING:
    from claimtriage.core.models import ClaimCreate

logger = logging.getLogger(__name__)

RESPONSE_FIELDS = frozenset({"priority", "confidence", "reasoning"})

REASON_DISABLED = "Priority classification is disabled in configuration"
REASON_NOT_CONFIGURED = "Priority classification service not configured"
REASON_PARSE_FAILED = "Priority classification response parsing failed; defaulting to standard priority"


@dataclass(frozen=True)
class ClassificationInput:
    """Features sent to the oracle for one claim."""

    cpt_code: str
    icd10_code: str
    billed_amount: Decimal | float | int
    patient_age: int | None = None


def cost_based_priority(billed_amount: Decimal | float | int, thresholds: CostThresholds | None = None) -> Priority:
    """Deterministic priority from billed amount alone."""
    thresholds = thresholds or CostThresholds()
    amount = Decimal(str(billed_amount))
    if amount >= Decimal(str(thresholds.urgent)):
        return Priority.URGENT
    if amount < Decimal(str(thresholds.routine)):
        return Priority.ROUTINE
    return Priority.STANDARD


def fallback_result(reasoning: str) -> PriorityResult:
    return PriorityResult(priority=Priority.STANDARD, confidence=0.0, reasoning=reasoning)


def parse_oracle_response(content: str) -> PriorityResult:
    """Parse and validate the oracle answer.

    Raises:
        OracleError: if the answer is not a JSON object with exactly ``priority``,
            ``confidence`` and ``reasoning`` holding valid values.
    """
    try:
        data = json.loads(extract_json_from_response(content))
    except json.JSONDecodeError as e:
        raise OracleError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise OracleError("Response is not a JSON object")
    if set(data) != RESPONSE_FIELDS:
        raise OracleError(f"Unexpected response fields: {sorted(data)}")

    priority = data["priority"]
    if priority not in {p.value for p in Priority}:
        raise OracleError(f"Invalid priority value: {priority!r}")
    confidence = data["confidence"]
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise OracleError("Confidence is not a number")
    if not math.isfinite(confidence) or not 0.0 <= confidence <= 1.0:
        raise OracleError(f"Confidence out of range: {confidence}")
    reasoning = data["reasoning"]
    if not isinstance(reasoning, str) or not reasoning.strip():
        raise OracleError("Missing or invalid reasoning")

    return PriorityResult(priority=Priority(priority), confidence=float(confidence), reasoning=reasoning)


def _check_inputs(cpt_code: Any, icd10_code: Any, billed_amount: Any) -> Decimal:
    details: dict[str, str] = {}
    if not isinstance(cpt_code, str) or not cpt_code.strip():
        details["cpt_code"] = "cptCode is required and must be a string"
    if not isinstance(icd10_code, str) or not icd10_code.strip():
        details["icd10_code"] = "icd10Code is required and must be a string"
    amount: Decimal | None = None
    if not isinstance(billed_amount, bool) and isinstance(billed_amount, (int, float, Decimal)):
        try:
            amount = Decimal(str(billed_amount))
        except InvalidOperation:
            amount = None
    if amount is None or not amount.is_finite() or amount <= 0:
        details["billed_amount"] = "billedAmount is required and must be a positive number"
    if details:
        raise InputError("Invalid classification input", details=details)
    return amount  # type: ignore[return-value]


class PriorityClassifier:
    """Classifies claims by processing priority."""

    def __init__(self, settings: Settings | None = None, llm: LLMClient | None = None) -> None:
        """Initialize the classifier.

        Args:
            settings: Application settings. If None, loads from environment.
            llm: Oracle client. If None, one is created when an API key is configured;
                without a key the classifier runs unconfigured.
        """
        self.settings = settings or Settings()
        if llm is None and self.settings.llm.api_key:
            llm = LLMClient.create(self.settings)
        self._llm = llm

    @property
    def timeout_seconds(self) -> float:
        return self.settings.classification.timeout_ms / 1000

    def classify_by_cost(self, billed_amount: Decimal | float | int) -> PriorityResult:
        """Deterministic classification for callers that must not consult the oracle."""
        thresholds = self.settings.classification.cost_thresholds
        priority = cost_based_priority(billed_amount, thresholds)
        return PriorityResult(
            priority=priority,
            confidence=0.0,
            reasoning=(
                f"Cost-based rule: billed ${Decimal(str(billed_amount)):.2f} "
                f"(urgent >= ${thresholds.urgent:,.0f}, routine < ${thresholds.routine:,.0f})"
            ),
        )

    async def classify(
        self,
        cpt_code: str,
        icd10_code: str,
        billed_amount: Decimal | float | int,
        patient_age: int | None = None,
    ) -> PriorityResult:
        """Classify one claim.

        Only malformed input raises (InputError); every oracle problem yields a
        STANDARD / 0.0 fallback whose reasoning names the cause.
        """
        amount = _check_inputs(cpt_code, icd10_code, billed_amount)

        if not self.settings.classification.enabled:
            logger.info("Priority classification is disabled, returning default priority")
            return fallback_result(REASON_DISABLED)
        if self._llm is None:
            logger.warning("Priority oracle not configured, returning default priority")
            return fallback_result(REASON_NOT_CONFIGURED)

        thresholds = self.settings.classification.cost_thresholds
        prompt = build_categorization_prompt(
            cpt_code, icd10_code, amount, patient_age,
            urgent_threshold=thresholds.urgent, routine_threshold=thresholds.routine,
        )
        messages: list[dict[str, Any]] = [
            {"role": MessageRole.SYSTEM.value, "content": SYSTEM_PROMPT},
            {"role": MessageRole.USER.value, "content": prompt},
        ]
        logger.info("Classifying claim: CPT=%s, ICD-10=%s, Amount=$%s", cpt_code, icd10_code, amount)

        try:
            # wait_for cancels the oracle call when the timeout wins
            response = await asyncio.wait_for(
                self._llm.chat(messages, max_tokens=self.settings.llm.max_tokens),  # type: ignore[arg-type]
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            timeout_ms = self.settings.classification.timeout_ms
            logger.warning("Priority oracle timed out after %dms", timeout_ms)
            return fallback_result(
                f"Priority classification timed out after {timeout_ms} ms; defaulting to standard priority"
            )
        except Exception as e:
            logger.warning("Priority oracle error: %s", e)
            return fallback_result(
                f"Priority classification service error: {e}. Defaulting to standard priority."
            )

        try:
            result = parse_oracle_response(response.content)
        except OracleError as e:
            logger.warning("Failed to parse oracle response: %s", e.message)
            logger.debug("Raw oracle response: %s", response.content)
            return fallback_result(REASON_PARSE_FAILED)

        logger.info("Classification result: %s (confidence: %.2f)", result.priority.value, result.confidence)
        return result

    async def classify_claim(self, claim: ClaimCreate, today: date | None = None) -> PriorityResult:
        """Classify a claim submission, deriving the patient age from the date of birth."""
        return await self.classify(
            claim.service.cpt_code,
            claim.service.icd10_code,
            claim.service.billed_amount,
            calculate_age(claim.patient.date_of_birth, today),
        )

    async def classify_many(self, items: list[ClassificationInput]) -> list[PriorityResult]:
        """Classify sequentially, pausing between oracle calls to respect rate limits."""
        delay = self.settings.classification.batch_delay_ms / 1000
        results: list[PriorityResult] = []
        for i, item in enumerate(items):
            if i and delay:
                await asyncio.sleep(delay)
            results.append(
                await self.classify(item.cpt_code, item.icd10_code, item.billed_amount, item.patient_age)
            )
        return results
