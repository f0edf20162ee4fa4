"""Simulated first-in-first-out baseline.

Estimates how each tier would have fared without prioritization. Every claim
is assumed to wait the volume-weighted average time across all decided claims,
then scaled per tier; SLA compliance is shifted by fixed offsets. The output
is an estimate and is labeled as such wherever it is shown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimtriage.analytics.models import ComparisonMetrics, Improvement, ScenarioFigures
from claimtriage.core.types import Priority
from claimtriage.core.utils import percent, round1


if TYPE_CHECKING:
    from claimtriage.analytics.models import TierTiming

FIFO_HOUR_MULTIPLIERS = {"URGENT": 1.5, "STANDARD": 1.1, "ROUTINE": 0.9}
FIFO_SLA_OFFSETS = {"URGENT": -35.0, "STANDARD": -15.0, "ROUTINE": 5.0}
IMPROVEMENT_TIERS = (Priority.URGENT.value, Priority.STANDARD.value)


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def weighted_average_hours(time_metrics: dict[str, TierTiming]) -> float:
    total = sum(t.count for t in time_metrics.values())
    if not total:
        return 0.0
    return sum(t.average_hours * t.count for t in time_metrics.values()) / total


def simulate_fifo_baseline(time_metrics: dict[str, TierTiming]) -> ComparisonMetrics:
    weighted = weighted_average_hours(time_metrics)

    actual: dict[str, ScenarioFigures] = {}
    baseline: dict[str, ScenarioFigures] = {}
    for tier, multiplier in FIFO_HOUR_MULTIPLIERS.items():
        timing = time_metrics[tier]
        actual[tier] = ScenarioFigures(
            average_hours=timing.average_hours,
            sla_compliance=timing.sla_compliance_percent,
            count=timing.count,
        )
        baseline[tier] = ScenarioFigures(
            average_hours=round1(weighted * multiplier),
            sla_compliance=_clamp_percent(timing.sla_compliance_percent + FIFO_SLA_OFFSETS[tier]),
            count=timing.count,
        )

    improvement = {}
    for tier in IMPROVEMENT_TIERS:
        saved = baseline[tier].average_hours - actual[tier].average_hours
        improvement[tier] = Improvement(
            time_saved_hours=round1(saved),
            time_saved_percent=percent(saved, baseline[tier].average_hours),
            sla_improvement=round1(actual[tier].sla_compliance - baseline[tier].sla_compliance),
        )

    return ComparisonMetrics(
        with_prioritization=actual,
        without_prioritization=baseline,
        improvement=improvement,
    )
