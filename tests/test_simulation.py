"""Tests for the simulated FIFO baseline."""

from __future__ import annotations

from claimtriage.analytics.models import TierTiming
from claimtriage.analytics.simulation import simulate_fifo_baseline, weighted_average_hours


def timing(count: int, hours: float, sla: float, target: int) -> TierTiming:
    return TierTiming(count=count, average_hours=hours, sla_compliance_percent=sla, sla_target_hours=target)


def sample_metrics() -> dict[str, TierTiming]:
    return {
        "URGENT": timing(2, 10.0, 90.0, 24),
        "STANDARD": timing(6, 40.0, 80.0, 72),
        "ROUTINE": timing(2, 100.0, 98.0, 168),
    }


class TestSimulateFifoBaseline:
    def test_weighted_average(self) -> None:
        # (2*10 + 6*40 + 2*100) / 10
        assert weighted_average_hours(sample_metrics()) == 46.0

    def test_baseline_hours_scale_per_tier(self) -> None:
        baseline = simulate_fifo_baseline(sample_metrics()).without_prioritization
        assert baseline["URGENT"].average_hours == 69.0
        assert baseline["STANDARD"].average_hours == 50.6
        assert baseline["ROUTINE"].average_hours == 41.4

    def test_sla_offsets_are_clamped(self) -> None:
        baseline = simulate_fifo_baseline(sample_metrics()).without_prioritization
        assert baseline["URGENT"].sla_compliance == 55.0
        assert baseline["STANDARD"].sla_compliance == 65.0
        assert baseline["ROUTINE"].sla_compliance == 100.0

        low = sample_metrics()
        low["URGENT"] = timing(2, 10.0, 20.0, 24)
        assert simulate_fifo_baseline(low).without_prioritization["URGENT"].sla_compliance == 0.0

    def test_improvement_for_urgent_and_standard_only(self) -> None:
        comparison = simulate_fifo_baseline(sample_metrics())
        assert set(comparison.improvement) == {"URGENT", "STANDARD"}
        urgent = comparison.improvement["URGENT"]
        assert urgent.time_saved_hours == 59.0
        assert urgent.time_saved_percent == 85.5
        assert urgent.sla_improvement == 35.0

    def test_actual_figures_carried_through(self) -> None:
        actual = simulate_fifo_baseline(sample_metrics()).with_prioritization
        assert actual["STANDARD"].average_hours == 40.0
        assert actual["STANDARD"].count == 6

    def test_no_decided_claims(self) -> None:
        empty = {tier: timing(0, 0.0, 0.0, 24) for tier in ("URGENT", "STANDARD", "ROUTINE")}
        comparison = simulate_fifo_baseline(empty)
        assert comparison.without_prioritization["URGENT"].average_hours == 0.0
        assert comparison.improvement["URGENT"].time_saved_percent == 0.0
        assert comparison.is_estimate is True
