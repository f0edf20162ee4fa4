"""Configuration module."""

from claimtriage.config.settings import (
    ClassificationSettings,
    ConfigReport,
    CostThresholds,
    LLMProviderEnum,
    Settings,
)

__all__ = [
    "ClassificationSettings",
    "ConfigReport",
    "CostThresholds",
    "LLMProviderEnum",
    "Settings",
]
