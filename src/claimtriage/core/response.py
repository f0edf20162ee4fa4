"""Response models for priority oracle calls."""

from __future__ import annotations

from pydantic import BaseModel


class TokenUsage(BaseModel):
    """Token usage information."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """Response from an LLM call."""

    content: str = ""
    finish_reason: str = "stop"
    usage: TokenUsage | None = None
