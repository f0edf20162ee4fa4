"""Priority classification."""

from claimtriage.classification.classifier import (
    ClassificationInput,
    PriorityClassifier,
    cost_based_priority,
    parse_oracle_response,
)
from claimtriage.classification.prompt import build_categorization_prompt

__all__ = [
    "ClassificationInput",
    "PriorityClassifier",
    "build_categorization_prompt",
    "cost_based_priority",
    "parse_oracle_response",
]
