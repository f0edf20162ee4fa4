"""Tests for priority classification and its fallbacks."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from claimtriage.classification.classifier import (
    REASON_DISABLED,
    REASON_NOT_CONFIGURED,
    REASON_PARSE_FAILED,
    ClassificationInput,
    PriorityClassifier,
    cost_based_priority,
    parse_oracle_response,
)
from claimtriage.classification.prompt import build_categorization_prompt
from claimtriage.config.settings import CostThresholds, LLMProviderEnum, Settings
from claimtriage.core.errors import InputError, OracleError
from claimtriage.core.llm import LLMClient
from claimtriage.core.mock_llm import MockLLMClient
from claimtriage.core.models import ClaimCreate
from claimtriage.core.providers import AnthropicClient, OpenAIClient
from claimtriage.core.types import Priority
from tests.conftest import claim_payload


def _answer(priority: str = "URGENT", confidence: float = 0.95, reasoning: str = "Acute MI in the ED.") -> str:
    return json.dumps({"priority": priority, "confidence": confidence, "reasoning": reasoning})


def _classifier(settings: Settings, llm: MockLLMClient | None) -> PriorityClassifier:
    return PriorityClassifier(settings, llm=llm)


class TestCostBasedPriority:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Decimal("5000"), Priority.URGENT),
            (Decimal("12000.50"), Priority.URGENT),
            (Decimal("4999.99"), Priority.STANDARD),
            (Decimal("500"), Priority.STANDARD),
            (Decimal("499.99"), Priority.ROUTINE),
            (25, Priority.ROUTINE),
        ],
    )
    def test_thresholds(self, amount: Decimal | int, expected: Priority) -> None:
        assert cost_based_priority(amount) == expected

    def test_custom_thresholds(self) -> None:
        thresholds = CostThresholds(urgent=1000, routine=100)
        assert cost_based_priority(1000, thresholds) == Priority.URGENT
        assert cost_based_priority(99, thresholds) == Priority.ROUTINE

    def test_classify_by_cost(self, settings: Settings) -> None:
        result = _classifier(settings, None).classify_by_cost(Decimal("7200"))
        assert result.priority == Priority.URGENT
        assert result.confidence == 0.0
        assert "Cost-based" in result.reasoning


class TestParseOracleResponse:
    def test_plain_json(self) -> None:
        result = parse_oracle_response(_answer())
        assert result.priority == Priority.URGENT
        assert result.confidence == 0.95

    def test_markdown_fenced_json(self) -> None:
        result = parse_oracle_response(f"```json\n{_answer('ROUTINE', 0.9)}\n```")
        assert result.priority == Priority.ROUTINE

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            "[1, 2, 3]",
            json.dumps({"priority": "URGENT", "confidence": 0.9}),
            json.dumps({"priority": "URGENT", "confidence": 0.9, "reasoning": "x", "extra": 1}),
            _answer(priority="CRITICAL"),
            _answer(confidence=1.5),
            _answer(confidence=-0.1),
            json.dumps({"priority": "URGENT", "confidence": True, "reasoning": "x"}),
            json.dumps({"priority": "URGENT", "confidence": "0.9", "reasoning": "x"}),
            _answer(reasoning="   "),
        ],
    )
    def test_rejects_invalid(self, content: str) -> None:
        with pytest.raises(OracleError):
            parse_oracle_response(content)


class TestPriorityClassifier:
    @pytest.mark.asyncio
    async def test_emergency_claim_is_urgent(self, classifier: PriorityClassifier) -> None:
        result = await classifier.classify("99285", "I21.9", Decimal("8500.00"), patient_age=67)
        assert result.priority == Priority.URGENT
        assert result.confidence == 0.95

    @pytest.mark.asyncio
    async def test_well_formed_answer_returned_verbatim(self, settings: Settings) -> None:
        llm = MockLLMClient(responses=[_answer("ROUTINE", 0.42, "Annual physical.")])
        result = await _classifier(settings, llm).classify("99395", "Z00.00", 180)
        assert (result.priority, result.confidence, result.reasoning) == (Priority.ROUTINE, 0.42, "Annual physical.")

    @pytest.mark.asyncio
    async def test_timeout_falls_back_and_cancels_call(self, settings: Settings) -> None:
        settings.classification.timeout_ms = 50
        llm = MockLLMClient(delay=5.0)

        result = await _classifier(settings, llm).classify("99285", "I21.9", 8500)

        assert result.priority == Priority.STANDARD
        assert result.confidence == 0.0
        assert "timed out" in result.reasoning
        assert "50 ms" in result.reasoning
        assert llm.cancelled is True

    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self, settings: Settings) -> None:
        llm = MockLLMClient(error=ConnectionError("connection reset"))
        result = await _classifier(settings, llm).classify("99213", "E11.9", 150)
        assert result.priority == Priority.STANDARD
        assert result.confidence == 0.0
        assert "service error" in result.reasoning
        assert "connection reset" in result.reasoning

    @pytest.mark.asyncio
    async def test_malformed_answer_falls_back(self, settings: Settings) -> None:
        llm = MockLLMClient(responses=["Sure! The priority is URGENT."])
        result = await _classifier(settings, llm).classify("99213", "E11.9", 150)
        assert result.priority == Priority.STANDARD
        assert result.confidence == 0.0
        assert result.reasoning == REASON_PARSE_FAILED

    @pytest.mark.asyncio
    async def test_disabled_skips_oracle(self, settings: Settings, mock_llm: MockLLMClient) -> None:
        settings.classification.enabled = False
        result = await _classifier(settings, mock_llm).classify("99285", "I21.9", 8500)
        assert result.reasoning == REASON_DISABLED
        assert result.priority == Priority.STANDARD
        assert mock_llm.call_count == 0

    @pytest.mark.asyncio
    async def test_missing_key_is_not_configured(self, settings: Settings) -> None:
        classifier = PriorityClassifier(settings)
        result = await classifier.classify("99285", "I21.9", 8500)
        assert result.reasoning == REASON_NOT_CONFIGURED
        assert result.confidence == 0.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("cpt", "icd", "amount", "field"),
        [
            ("", "I21.9", 100, "cpt_code"),
            ("99213", "  ", 100, "icd10_code"),
            ("99213", "E11.9", 0, "billed_amount"),
            ("99213", "E11.9", -5, "billed_amount"),
            ("99213", "E11.9", "100", "billed_amount"),
            ("99213", "E11.9", True, "billed_amount"),
            (None, "E11.9", 100, "cpt_code"),
        ],
    )
    async def test_invalid_input_raises(
        self, classifier: PriorityClassifier, cpt: object, icd: object, amount: object, field: str
    ) -> None:
        with pytest.raises(InputError) as exc_info:
            await classifier.classify(cpt, icd, amount)  # type: ignore[arg-type]
        assert field in exc_info.value.details

    @pytest.mark.asyncio
    async def test_prompt_includes_age_when_known(self, classifier: PriorityClassifier, mock_llm: MockLLMClient) -> None:
        submission = ClaimCreate.from_payload(claim_payload(dob="1960-03-05"))
        await classifier.classify_claim(submission, today=date(2026, 3, 2))
        prompt = mock_llm.last_messages[-1]["content"]
        assert "- Patient Age: 65 years" in prompt
        assert "- CPT Code: 99213" in prompt

    @pytest.mark.asyncio
    async def test_classify_many_preserves_order(self, settings: Settings, mock_llm: MockLLMClient) -> None:
        settings.classification.batch_delay_ms = 1
        items = [
            ClassificationInput("99285", "I21.9", 8500),
            ClassificationInput("99395", "Z00.00", 180),
            ClassificationInput("99213", "E11.9", 1200),
        ]
        results = await _classifier(settings, mock_llm).classify_many(items)
        assert [r.priority for r in results] == [Priority.URGENT, Priority.ROUTINE, Priority.STANDARD]
        assert mock_llm.call_count == 3


class TestPrompt:
    def test_age_line_omitted_when_unknown(self) -> None:
        prompt = build_categorization_prompt("99213", "E11.9", Decimal("150"))
        assert "Patient Age" not in prompt
        assert "- Billed Amount: $150.00" in prompt

    def test_thresholds_rendered(self) -> None:
        prompt = build_categorization_prompt("99213", "E11.9", 150, urgent_threshold=7500, routine_threshold=250)
        assert "(>$7,500)" in prompt
        assert "($250-$7,500)" in prompt


class TestLLMFactory:
    def test_mock(self) -> None:
        assert isinstance(LLMClient.create(mock=True), MockLLMClient)

    def test_provider_selection(self, settings: Settings) -> None:
        settings.llm.anthropic_api_key = "sk-ant-test"
        assert isinstance(LLMClient.create(settings), AnthropicClient)
        settings.llm.provider = LLMProviderEnum.OPENAI
        settings.llm.openai_api_key = "sk-openai-test"
        assert isinstance(LLMClient.create(settings), OpenAIClient)

    def test_classifier_builds_client_when_key_present(self, settings: Settings) -> None:
        settings.llm.anthropic_api_key = "sk-ant-test"
        assert isinstance(PriorityClassifier(settings)._llm, AnthropicClient)
