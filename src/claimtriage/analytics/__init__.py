"""Operational analytics over adjudicated claims."""

from claimtriage.analytics.aggregator import AnalyticsAggregator
from claimtriage.analytics.models import AnalyticsReport, ComparisonMetrics, Period, TrendPoint
from claimtriage.analytics.simulation import simulate_fifo_baseline

__all__ = ["AnalyticsAggregator", "AnalyticsReport", "ComparisonMetrics", "Period", "TrendPoint", "simulate_fifo_baseline"]
