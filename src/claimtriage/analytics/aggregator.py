"""Analytics aggregator over the claim store."""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import TYPE_CHECKING

from claimtriage.analytics.metrics import (
    approval_metrics,
    confidence_metrics,
    financial_metrics,
    priority_distribution,
    time_to_adjudication,
)
from claimtriage.analytics.models import AnalyticsReport, Period, TrendPoint
from claimtriage.analytics.simulation import simulate_fifo_baseline
from claimtriage.config.settings import Settings
from claimtriage.core.errors import InputError
from claimtriage.core.utils import ensure_utc, utcnow


if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date, datetime

    from claimtriage.storage.base import ClaimStore

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)


class AnalyticsAggregator:
    """Derives operational reports from claims submitted in a window.

    Reports are computed on every call and never stored; with no intervening
    writes the same window yields the same report.
    """

    def __init__(self, store: ClaimStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or Settings()

    def resolve_window(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> Period:
        """Fill in the default trailing window and validate it.

        Raises:
            InputError: ``start`` is after ``end``.
        """
        end = ensure_utc(end) if end else ensure_utc(now) if now else utcnow()
        start = ensure_utc(start) if start else end - self.settings.analytics.default_window_days * DAY
        if start > end:
            raise InputError(
                "Start date must not be after end date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        return Period(start_date=start, end_date=end, days=math.ceil((end - start) / DAY))

    def overview(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> AnalyticsReport:
        period = self.resolve_window(start, end, now)
        claims = self.store.claims_submitted_between(period.start_date, period.end_date)
        logger.info("Computing analytics over %d claims (%d days)", len(claims), period.days)

        time_metrics = time_to_adjudication(claims, self.settings.analytics.sla_target_hours)
        return AnalyticsReport(
            period=period,
            distribution=priority_distribution(claims),
            time_metrics=time_metrics,
            approval_metrics=approval_metrics(claims),
            confidence_metrics=confidence_metrics(claims),
            financial_metrics=financial_metrics(claims),
            comparison_metrics=simulate_fifo_baseline(time_metrics),
        )

    def trends(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> Iterator[TrendPoint]:
        """Yield per-day submission counts, ascending by UTC date.

        Only dates with at least one submission appear.
        """
        period = self.resolve_window(start, end, now)
        claims = self.store.claims_submitted_between(period.start_date, period.end_date)

        point: TrendPoint | None = None
        for claim in claims:
            day: date = ensure_utc(claim.submitted_at).date()
            if point is not None and point.day != day:
                yield point
                point = None
            if point is None:
                point = TrendPoint(day=day)
            tier = claim.priority.value.lower()
            setattr(point, tier, getattr(point, tier) + 1)
            point.total += 1
        if point is not None:
            yield point
