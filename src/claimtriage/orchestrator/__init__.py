"""Intake and adjudication orchestration."""

from claimtriage.orchestrator.pipeline import ClaimPipeline

__all__ = ["ClaimPipeline"]
