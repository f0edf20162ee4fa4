"""Mock LLM client for running without API keys and for tests."""

from __future__ import annotations

import asyncio
import json
import re
from typing import TYPE_CHECKING

from claimtriage.core.llm import LLMClient
from claimtriage.core.response import LLMResponse, TokenUsage


if TYPE_CHECKING:
    from claimtriage.core.types import JSON

EMERGENCY_CPT = re.compile(r"^9928[1-5]$")
CRITICAL_ICD_PREFIXES = ("I21", "I60", "I61", "I63", "S06", "R57", "J96")
PREVENTIVE_CPT_PREFIXES = ("9938", "9939", "906")


class MockLLMClient(LLMClient):
    """Mock LLM client that answers priority prompts with a rule-of-thumb classification.

    Tests can script it with fixed ``responses`` (consumed in order, the last one repeats),
    an ``error`` to raise, or a ``delay`` in seconds to exceed the classifier timeout.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self._responses = list(responses or [])
        self._error = error
        self._delay = delay
        self.call_count = 0
        self.cancelled = False
        self.last_messages: list[JSON] = []

    async def chat(
        self, messages: list[JSON], max_tokens: int = 500, temperature: float = 0.0
    ) -> LLMResponse:
        self.call_count += 1
        self.last_messages = messages
        if self._delay:
            try:
                await asyncio.sleep(self._delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self._error is not None:
            raise self._error
        if self._responses:
            content = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        else:
            content = self._classify(self._last_user_message(messages))
        return LLMResponse(content=content, finish_reason="stop",
                           usage=TokenUsage(prompt_tokens=400, completion_tokens=60, total_tokens=460))

    @staticmethod
    def _last_user_message(messages: list[JSON]) -> str:
        for msg in reversed(messages):
            if msg.get("role") == "user":
                return str(msg.get("content", ""))
        return ""

    def _classify(self, prompt: str) -> str:
        cpt = self._field(prompt, "CPT Code")
        icd = self._field(prompt, "ICD-10 Diagnosis Code")
        amount_text = self._field(prompt, "Billed Amount").lstrip("$").replace(",", "")
        try:
            amount = float(amount_text)
        except ValueError:
            amount = 0.0

        if EMERGENCY_CPT.match(cpt) or icd.startswith(CRITICAL_ICD_PREFIXES):
            result = {"priority": "URGENT", "confidence": 0.95,
                      "reasoning": f"Emergency or critical presentation (CPT {cpt}, ICD-10 {icd})."}
        elif amount >= 5000:
            result = {"priority": "URGENT", "confidence": 0.82,
                      "reasoning": "High billed amount indicates a major procedure."}
        elif cpt.startswith(PREVENTIVE_CPT_PREFIXES) or amount < 500:
            result = {"priority": "ROUTINE", "confidence": 0.9,
                      "reasoning": "Preventive or low-cost service with no urgency indicators."}
        else:
            result = {"priority": "STANDARD", "confidence": 0.76,
                      "reasoning": "Medically necessary, non-emergency service of moderate cost."}
        return json.dumps(result)

    @staticmethod
    def _field(prompt: str, label: str) -> str:
        match = re.search(rf"- {re.escape(label)}: (\S+)", prompt)
        return match.group(1) if match else ""
