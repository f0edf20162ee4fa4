"""claimtriage - healthcare claim intake, priority triage and adjudication."""

from __future__ import annotations

from claimtriage.adjudication import AdjudicationStateMachine
from claimtriage.analytics import AnalyticsAggregator
from claimtriage.classification import PriorityClassifier
from claimtriage.config import Settings
from claimtriage.orchestrator import ClaimPipeline
from claimtriage.storage import SequenceIssuer, SQLiteClaimStore


__version__ = "0.1.0"

__all__ = [
    "AdjudicationStateMachine",
    "AnalyticsAggregator",
    "ClaimPipeline",
    "PriorityClassifier",
    "SQLiteClaimStore",
    "SequenceIssuer",
    "Settings",
    "__version__",
]
