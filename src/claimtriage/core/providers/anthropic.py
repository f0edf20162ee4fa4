"""Anthropic LLM client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from claimtriage.core.llm import LLMClient
from claimtriage.core.response import LLMResponse, TokenUsage


if TYPE_CHECKING:
    from claimtriage.config.settings import Settings
    from claimtriage.core.types import JSON


class AnthropicClient(LLMClient):
    """Anthropic API client."""

    def __init__(self, settings: Settings) -> None:
        from anthropic import AsyncAnthropic

        self.client = AsyncAnthropic(api_key=settings.llm.anthropic_api_key, max_retries=0)
        self.model = settings.llm.anthropic_model

    async def chat(
        self,
        messages: list[JSON],
        max_tokens: int = 500,
        temperature: float = 0.0,
    ) -> LLMResponse:
        system_content, anthropic_messages = "", []
        for msg in messages:
            role, content = msg.get("role", ""), msg.get("content", "")
            if role == "system":
                system_content += str(content) + "\n"
            else:
                anthropic_messages.append({"role": role, "content": str(content)})

        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": anthropic_messages,
            "temperature": temperature,
        }
        if system_content:
            kwargs["system"] = system_content.strip()

        response = await self.client.messages.create(**kwargs)
        content = "".join(block.text for block in response.content if block.type == "text")
        usage = TokenUsage(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
            total_tokens=response.usage.input_tokens + response.usage.output_tokens,
        )
        return LLMResponse(
            content=content,
            finish_reason=response.stop_reason or "stop",
            usage=usage,
        )
