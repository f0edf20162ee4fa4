"""LLM client abstraction for multiple providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from claimtriage.config.settings import LLMProviderEnum, Settings
from claimtriage.core.response import LLMResponse


if TYPE_CHECKING:
    from claimtriage.core.types import JSON


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def chat(
        self,
        messages: list[JSON],
        max_tokens: int = 500,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Send a chat completion request."""
        ...

    @classmethod
    def create(cls, settings: Settings | None = None, mock: bool = False) -> LLMClient:
        """Factory method to create the appropriate LLM client."""
        if mock:
            from claimtriage.core.mock_llm import MockLLMClient

            return MockLLMClient()
        if settings is None:
            settings = Settings()
        if settings.llm.provider == LLMProviderEnum.ANTHROPIC:
            from claimtriage.core.providers.anthropic import AnthropicClient

            return AnthropicClient(settings)
        elif settings.llm.provider == LLMProviderEnum.OPENAI:
            from claimtriage.core.providers.openai import OpenAIClient

            return OpenAIClient(settings)
        else:
            msg = f"Unknown LLM provider: {settings.llm.provider}"
            raise ValueError(msg)
