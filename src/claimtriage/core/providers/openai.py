"""OpenAI LLM client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimtriage.core.llm import LLMClient
from claimtriage.core.response import LLMResponse, TokenUsage


if TYPE_CHECKING:
    from claimtriage.config.settings import Settings
    from claimtriage.core.types import JSON


class OpenAIClient(LLMClient):
    """OpenAI API client."""

    def __init__(self, settings: Settings) -> None:
        from openai import AsyncOpenAI  # noqa: PLC0415
        self.client = AsyncOpenAI(api_key=settings.llm.openai_api_key, max_retries=0)
        self.model = settings.llm.openai_model

    async def chat(
        self, messages: list[JSON], max_tokens: int = 500, temperature: float = 0.0,
    ) -> LLMResponse:
        response = await self.client.chat.completions.create(
            model=self.model, messages=messages, max_tokens=max_tokens,  # type: ignore[arg-type]
            temperature=temperature, response_format={"type": "json_object"},
        )
        message = response.choices[0].message
        usage = None
        if response.usage:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        return LLMResponse(
            content=message.content or "",
            finish_reason=response.choices[0].finish_reason or "stop", usage=usage,
        )
