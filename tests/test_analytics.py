"""Tests for the analytics aggregator and metric functions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio

from claimtriage.analytics.aggregator import AnalyticsAggregator
from claimtriage.analytics.metrics import confidence_metrics, priority_distribution, time_to_adjudication
from claimtriage.config.settings import Settings
from claimtriage.core.errors import InputError
from claimtriage.core.types import ClaimStatus, Priority
from claimtriage.orchestrator.pipeline import ClaimPipeline
from claimtriage.storage.repository import SQLiteClaimStore
from tests.conftest import ADJUDICATOR, PROVIDER_USER, claim_payload, make_claim


START = datetime(2026, 3, 1, tzinfo=timezone.utc)
END = datetime(2026, 3, 31, tzinfo=timezone.utc)
SUBMITTED = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def populated(pipeline: ClaimPipeline) -> ClaimPipeline:
    """Three claims: urgent approved in 12h, standard denied in 96h, routine pending."""
    urgent = await pipeline.submit_claim(
        claim_payload(cpt="99285", icd10="I21.9", amount="8500.00"), PROVIDER_USER, now=SUBMITTED
    )
    standard = await pipeline.submit_claim(
        claim_payload(cpt="99213", icd10="E11.9", amount="1200.00"), PROVIDER_USER, now=SUBMITTED
    )
    await pipeline.submit_claim(
        claim_payload(cpt="99395", icd10="Z00.00", amount="250.00"), PROVIDER_USER,
        now=SUBMITTED + timedelta(days=1),
    )
    pipeline.adjudicate(
        urgent.id, {"decision": "approve", "approved_amount": "8000.00"}, ADJUDICATOR,
        now=SUBMITTED + timedelta(hours=12),
    )
    pipeline.adjudicate(
        standard.id,
        {"decision": "deny", "denial_reason_code": "INSUFFICIENT_DOCS", "denial_explanation": "Missing operative report for the billed visit."},
        ADJUDICATOR,
        now=SUBMITTED + timedelta(hours=96),
    )
    return pipeline


@pytest.fixture
def aggregator(settings: Settings, store: SQLiteClaimStore) -> AnalyticsAggregator:
    return AnalyticsAggregator(store, settings)


class TestWindow:
    def test_default_window_is_trailing_30_days(self, aggregator: AnalyticsAggregator) -> None:
        period = aggregator.resolve_window(now=END)
        assert period.end_date == END
        assert period.start_date == END - timedelta(days=30)
        assert period.days == 30

    def test_partial_days_round_up(self, aggregator: AnalyticsAggregator) -> None:
        period = aggregator.resolve_window(START, START + timedelta(days=2, hours=1))
        assert period.days == 3

    def test_start_after_end(self, aggregator: AnalyticsAggregator) -> None:
        with pytest.raises(InputError):
            aggregator.overview(END, START)


class TestOverview:
    @pytest.mark.asyncio
    async def test_distribution(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        report = aggregator.overview(START, END)
        assert report.distribution.total == 3
        assert {tier: share.count for tier, share in report.distribution.by_priority.items()} == {
            "URGENT": 1, "STANDARD": 1, "ROUTINE": 1,
        }
        assert report.distribution.by_priority["URGENT"].percentage == 33.3

    @pytest.mark.asyncio
    async def test_time_metrics(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        timing = aggregator.overview(START, END).time_metrics
        assert timing["URGENT"].average_hours == 12.0
        assert timing["URGENT"].average_days == 0.5
        assert timing["URGENT"].sla_compliance_percent == 100.0
        assert timing["STANDARD"].average_hours == 96.0
        assert timing["STANDARD"].sla_compliance_percent == 0.0
        assert timing["ROUTINE"].count == 0
        assert timing["ROUTINE"].sla_target_hours == 168

    @pytest.mark.asyncio
    async def test_approval_metrics(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        approval = aggregator.overview(START, END).approval_metrics
        assert approval.overall.approval_rate == 50.0
        assert (approval.overall.approved, approval.overall.denied) == (1, 1)
        assert approval.overall.total_billed == Decimal("9700.00")
        assert approval.overall.total_approved == Decimal("8000.00")
        assert approval.by_priority["URGENT"].average_approved_amount == Decimal("8000.00")
        assert approval.by_priority["ROUTINE"].approval_rate == 0.0

    @pytest.mark.asyncio
    async def test_confidence_metrics(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        confidence = aggregator.overview(START, END).confidence_metrics
        assert confidence.overall.average == 87.0
        assert (confidence.overall.min, confidence.overall.max) == (76.0, 95.0)
        dist = confidence.overall.distribution
        assert (dist.high, dist.medium, dist.low) == (2, 1, 0)
        assert dist.high_percent == 66.7
        assert confidence.by_priority["URGENT"].average == 95.0

    @pytest.mark.asyncio
    async def test_financial_metrics(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        financial = aggregator.overview(START, END).financial_metrics
        assert financial.overall.total_billed == Decimal("9950.00")
        assert financial.overall.total_approved == Decimal("8000.00")
        assert financial.by_priority["URGENT"].percent_of_total_value == 85.4
        assert financial.by_priority["STANDARD"].percent_of_total_value == 12.1
        assert financial.by_priority["ROUTINE"].average_billed == Decimal("250.00")

    @pytest.mark.asyncio
    async def test_comparison_is_labeled_estimate(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        comparison = aggregator.overview(START, END).comparison_metrics
        assert comparison.is_estimate is True
        assert "simulated" in comparison.note
        assert comparison.without_prioritization["URGENT"].average_hours == 81.0
        assert comparison.improvement["URGENT"].time_saved_hours == 69.0

    @pytest.mark.asyncio
    async def test_overview_is_idempotent(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        first = aggregator.overview(START, END)
        second = aggregator.overview(START, END)
        assert first.model_dump() == second.model_dump()

    @pytest.mark.asyncio
    async def test_window_excludes_outside_claims(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        report = aggregator.overview(SUBMITTED + timedelta(hours=1), END)
        assert report.distribution.total == 1
        assert report.distribution.by_priority["ROUTINE"].count == 1

    def test_empty_store(self, aggregator: AnalyticsAggregator) -> None:
        report = aggregator.overview(START, END)
        assert report.distribution.total == 0
        assert set(report.distribution.by_priority) == {"URGENT", "STANDARD", "ROUTINE"}
        assert report.financial_metrics.overall.total_billed == Decimal("0.00")
        assert report.comparison_metrics.without_prioritization["URGENT"].average_hours == 0.0


class TestTrends:
    @pytest.mark.asyncio
    async def test_one_point_per_day_ascending(self, populated: ClaimPipeline, aggregator: AnalyticsAggregator) -> None:
        points = list(aggregator.trends(START, END))
        assert [str(p.day) for p in points] == ["2026-03-02", "2026-03-03"]
        assert (points[0].urgent, points[0].standard, points[0].routine, points[0].total) == (1, 1, 0, 2)
        assert points[1].routine == 1

    def test_empty(self, aggregator: AnalyticsAggregator) -> None:
        assert list(aggregator.trends(START, END)) == []


class TestMetricFunctions:
    def test_all_tiers_present(self) -> None:
        dist = priority_distribution([make_claim(priority=Priority.URGENT)])
        assert dist.by_priority["ROUTINE"].count == 0
        assert dist.by_priority["URGENT"].percentage == 100.0

    def test_confidence_bucket_boundaries(self) -> None:
        claims = [make_claim(priority_confidence=c) for c in (0.9, 0.8999, 0.7, 0.6999)]
        dist = confidence_metrics(claims).overall.distribution
        assert (dist.high, dist.medium, dist.low) == (1, 2, 1)
        assert dist.medium_percent == 50.0

    def test_percentages_round_half_up(self) -> None:
        claims = [make_claim(priority=Priority.URGENT)] + [make_claim(priority=Priority.ROUTINE)] * 7
        assert priority_distribution(claims).by_priority["URGENT"].percentage == 12.5

    def test_sla_boundary_counts_as_met(self) -> None:
        submitted = datetime(2026, 3, 2, tzinfo=timezone.utc)
        on_time = make_claim(
            priority=Priority.URGENT, status=ClaimStatus.APPROVED, approved_amount=Decimal("10"),
            adjudicated_by_user_id=ADJUDICATOR, submitted_at=submitted, adjudicated_at=submitted + timedelta(hours=24),
        )
        late = on_time.model_copy(update={"adjudicated_at": submitted + timedelta(hours=24, seconds=1)})
        timing = time_to_adjudication([on_time, late])["URGENT"]
        assert timing.sla_compliance_percent == 50.0
        assert timing.min_hours == 24.0

    def test_undecided_claims_ignored_for_timing(self) -> None:
        assert time_to_adjudication([make_claim()])["STANDARD"].count == 0
