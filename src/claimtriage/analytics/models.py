"""Analytics report models."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003 - Pydantic needs at runtime
from decimal import Decimal

from pydantic import BaseModel, Field


ZERO = Decimal("0.00")


class Period(BaseModel):
    """Reporting window."""

    start_date: datetime
    end_date: datetime
    days: int


class TierShare(BaseModel):
    count: int = 0
    percentage: float = 0.0


class PriorityDistribution(BaseModel):
    """Claim volume per priority tier. Every tier is always present."""

    total: int = 0
    by_priority: dict[str, TierShare] = Field(default_factory=dict)


class TierTiming(BaseModel):
    """Time-to-adjudication statistics for one tier, in hours."""

    count: int = 0
    average_hours: float = 0.0
    average_days: float = 0.0
    min_hours: float = 0.0
    max_hours: float = 0.0
    sla_target_hours: int = 0
    sla_compliance_percent: float = 0.0


class ApprovalTotals(BaseModel):
    approval_rate: float = 0.0
    approved: int = 0
    denied: int = 0
    total_billed: Decimal = ZERO
    total_approved: Decimal = ZERO


class TierApproval(ApprovalTotals):
    average_approved_amount: Decimal = ZERO


class ApprovalMetrics(BaseModel):
    overall: ApprovalTotals = Field(default_factory=ApprovalTotals)
    by_priority: dict[str, TierApproval] = Field(default_factory=dict)


class ConfidenceDistribution(BaseModel):
    """Confidence buckets: high >= 0.90, medium [0.70, 0.90), low < 0.70."""

    high: int = 0
    high_percent: float = 0.0
    medium: int = 0
    medium_percent: float = 0.0
    low: int = 0
    low_percent: float = 0.0


class OverallConfidence(BaseModel):
    """Confidence figures expressed as percentages."""

    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    distribution: ConfidenceDistribution = Field(default_factory=ConfidenceDistribution)


class TierConfidence(BaseModel):
    average: float = 0.0
    count: int = 0


class ConfidenceMetrics(BaseModel):
    overall: OverallConfidence = Field(default_factory=OverallConfidence)
    by_priority: dict[str, TierConfidence] = Field(default_factory=dict)


class TierFinancials(BaseModel):
    total_billed: Decimal = ZERO
    total_approved: Decimal = ZERO
    average_billed: Decimal = ZERO
    count: int = 0
    percent_of_total_value: float = 0.0


class FinancialTotals(BaseModel):
    total_billed: Decimal = ZERO
    total_approved: Decimal = ZERO


class FinancialMetrics(BaseModel):
    overall: FinancialTotals = Field(default_factory=FinancialTotals)
    by_priority: dict[str, TierFinancials] = Field(default_factory=dict)


class ScenarioFigures(BaseModel):
    average_hours: float = 0.0
    sla_compliance: float = 0.0
    count: int = 0


class Improvement(BaseModel):
    time_saved_hours: float = 0.0
    time_saved_percent: float = 0.0
    sla_improvement: float = 0.0


class ComparisonMetrics(BaseModel):
    """Measured per-tier figures next to a simulated first-in-first-out baseline.

    The baseline is arithmetic, not a measurement; ``is_estimate`` is always True.
    """

    with_prioritization: dict[str, ScenarioFigures] = Field(default_factory=dict)
    without_prioritization: dict[str, ScenarioFigures] = Field(default_factory=dict)
    improvement: dict[str, Improvement] = Field(default_factory=dict)
    is_estimate: bool = True
    note: str = "Without-prioritization figures are simulated from FIFO processing assumptions, not measured"


class AnalyticsReport(BaseModel):
    """Operational analytics for one reporting window."""

    period: Period
    distribution: PriorityDistribution
    time_metrics: dict[str, TierTiming]
    approval_metrics: ApprovalMetrics
    confidence_metrics: ConfidenceMetrics
    financial_metrics: FinancialMetrics
    comparison_metrics: ComparisonMetrics


class TrendPoint(BaseModel):
    """Claims submitted on one UTC date, per tier."""

    day: date
    urgent: int = 0
    standard: int = 0
    routine: int = 0
    total: int = 0
