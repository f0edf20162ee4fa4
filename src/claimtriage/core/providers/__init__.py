"""LLM provider implementations."""

from claimtriage.core.providers.anthropic import AnthropicClient
from claimtriage.core.providers.openai import OpenAIClient


__all__ = ["AnthropicClient", "OpenAIClient"]
