"""Application settings and configuration."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProviderEnum(str, Enum):
    """Supported LLM providers for the priority oracle."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class LLMSettings(BaseModel):
    """LLM provider configuration."""

    provider: LLMProviderEnum = LLMProviderEnum.ANTHROPIC
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    max_tokens: int = 500

    @property
    def api_key(self) -> str:
        """Key for the configured provider."""
        if self.provider == LLMProviderEnum.OPENAI:
            return self.openai_api_key
        return self.anthropic_api_key


class CostThresholds(BaseModel):
    """Billed-amount cut-offs for the deterministic cost rule."""

    urgent: float = Field(default=5000.0, gt=0, description="Amounts at or above are URGENT")
    routine: float = Field(default=500.0, gt=0, description="Amounts below are ROUTINE")


class ClassificationSettings(BaseModel):
    """Priority classification configuration."""

    enabled: bool = True
    timeout_ms: int = Field(default=5000, gt=0)
    batch_delay_ms: int = Field(default=100, ge=0)
    cost_thresholds: CostThresholds = Field(default_factory=CostThresholds)


class StorageSettings(BaseModel):
    """Claim store configuration."""

    db_path: str = "claims.db"
    busy_timeout_seconds: float = 30.0


class AnalyticsSettings(BaseModel):
    """Analytics configuration."""

    default_window_days: int = Field(default=30, gt=0)
    sla_target_hours: dict[str, int] = Field(
        default_factory=lambda: {"URGENT": 24, "STANDARD": 72, "ROUTINE": 168}
    )


class ConfigReport(BaseModel):
    """Result of validating the configuration."""

    valid: bool
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # LLM Configuration
    llm: LLMSettings = Field(default_factory=LLMSettings)

    # Classification Configuration
    classification: ClassificationSettings = Field(default_factory=ClassificationSettings)

    # Storage Configuration
    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Analytics Configuration
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    # Logging
    log_level: str = "INFO"

    def __init__(self, **data: Any) -> None:
        """Initialize settings with environment variable overrides."""
        super().__init__(**data)
        self._load_env_overrides()

    def _load_env_overrides(self) -> None:
        """Load environment variable overrides for nested settings."""
        # LLM overrides
        if provider := os.getenv("LLM_PROVIDER"):
            self.llm.provider = LLMProviderEnum(provider)
        if key := os.getenv("ANTHROPIC_API_KEY"):
            self.llm.anthropic_api_key = key
        if key := os.getenv("OPENAI_API_KEY"):
            self.llm.openai_api_key = key
        if model := os.getenv("OPENAI_MODEL"):
            self.llm.openai_model = model
        if model := os.getenv("AI_CATEGORIZATION_MODEL"):
            self.llm.anthropic_model = model
        if max_tokens := os.getenv("AI_CATEGORIZATION_MAX_TOKENS"):
            self.llm.max_tokens = int(max_tokens)

        # Classification overrides
        if enabled := os.getenv("AI_CATEGORIZATION_ENABLED"):
            self.classification.enabled = enabled.lower() != "false"
        if timeout := os.getenv("AI_CATEGORIZATION_TIMEOUT"):
            self.classification.timeout_ms = int(timeout)

        # Storage overrides
        if db_path := os.getenv("CLAIMS_DB_PATH"):
            self.storage.db_path = db_path

    def validate_config(self) -> ConfigReport:
        """Check the classification setup for problems worth surfacing at startup."""
        warnings: list[str] = []
        errors: list[str] = []
        if not self.classification.enabled:
            warnings.append("Priority classification is disabled")
        if not self.llm.api_key:
            errors.append(f"API key for provider '{self.llm.provider.value}' is not configured")
        timeout = self.classification.timeout_ms
        if timeout < 1000 or timeout > 30000:
            warnings.append(f"Classification timeout is {timeout}ms (recommended: 2000-10000ms)")
        thresholds = self.classification.cost_thresholds
        if thresholds.routine >= thresholds.urgent:
            errors.append("Routine cost threshold must be below the urgent threshold")
        return ConfigReport(valid=not errors, warnings=warnings, errors=errors)
