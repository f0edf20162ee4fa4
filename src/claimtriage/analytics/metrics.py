"""Pure metric functions over a set of claims.

Each function takes the claims already filtered to the reporting window and
returns one report section. Tiers with no claims are present with zeros.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from claimtriage.analytics.models import (
    ApprovalMetrics,
    ApprovalTotals,
    ConfidenceDistribution,
    ConfidenceMetrics,
    FinancialMetrics,
    FinancialTotals,
    OverallConfidence,
    PriorityDistribution,
    TierApproval,
    TierConfidence,
    TierFinancials,
    TierShare,
    TierTiming,
)
from claimtriage.core.types import PRIORITIES, ClaimStatus
from claimtriage.core.utils import percent, round1, to_cents


if TYPE_CHECKING:
    from collections.abc import Sequence

    from claimtriage.core.models import Claim

HIGH_CONFIDENCE = 0.90
MEDIUM_CONFIDENCE = 0.70
DEFAULT_SLA_TARGETS = {"URGENT": 24, "STANDARD": 72, "ROUTINE": 168}


def _by_tier(claims: Sequence[Claim]) -> dict[str, list[Claim]]:
    groups: dict[str, list[Claim]] = {p.value: [] for p in PRIORITIES}
    for claim in claims:
        groups[claim.priority.value].append(claim)
    return groups


def _decided(claims: Sequence[Claim]) -> list[Claim]:
    return [c for c in claims if c.is_decided and c.adjudicated_at is not None]


def _sum(values: Sequence[Decimal]) -> Decimal:
    return sum(values, Decimal(0))


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def priority_distribution(claims: Sequence[Claim]) -> PriorityDistribution:
    total = len(claims)
    return PriorityDistribution(
        total=total,
        by_priority={
            tier: TierShare(count=len(group), percentage=percent(len(group), total))
            for tier, group in _by_tier(claims).items()
        },
    )


def time_to_adjudication(
    claims: Sequence[Claim], sla_targets: dict[str, int] | None = None
) -> dict[str, TierTiming]:
    """Hours from submission to decision per tier, with SLA compliance."""
    targets = sla_targets or DEFAULT_SLA_TARGETS
    result: dict[str, TierTiming] = {}
    for tier, group in _by_tier(_decided(claims)).items():
        hours = [c.hours_to_decision for c in group]
        target = targets[tier]
        avg = _mean(hours)
        result[tier] = TierTiming(
            count=len(hours),
            average_hours=round1(avg),
            average_days=round1(avg / 24),
            min_hours=round1(min(hours)) if hours else 0.0,
            max_hours=round1(max(hours)) if hours else 0.0,
            sla_target_hours=target,
            sla_compliance_percent=percent(sum(1 for h in hours if h <= target), len(hours)),
        )
    return result


def approval_metrics(claims: Sequence[Claim]) -> ApprovalMetrics:
    """Approval rates over decided claims, overall and per tier."""
    decided = _decided(claims)
    by_priority: dict[str, TierApproval] = {}
    for tier, group in _by_tier(decided).items():
        approved = [c for c in group if c.status == ClaimStatus.APPROVED]
        total_approved = _sum([c.approved_amount or Decimal(0) for c in approved])
        by_priority[tier] = TierApproval(
            approval_rate=percent(len(approved), len(group)),
            approved=len(approved),
            denied=len(group) - len(approved),
            total_billed=to_cents(_sum([c.billed_amount for c in group])),
            total_approved=to_cents(total_approved),
            average_approved_amount=to_cents(total_approved / len(approved)) if approved else to_cents(0),
        )
    approved_count = sum(t.approved for t in by_priority.values())
    overall = ApprovalTotals(
        approval_rate=percent(approved_count, len(decided)),
        approved=approved_count,
        denied=len(decided) - approved_count,
        total_billed=to_cents(_sum([c.billed_amount for c in decided])),
        total_approved=to_cents(_sum([c.approved_amount or Decimal(0) for c in decided])),
    )
    return ApprovalMetrics(overall=overall, by_priority=by_priority)


def confidence_metrics(claims: Sequence[Claim]) -> ConfidenceMetrics:
    """Classifier confidence quality, as percentages."""
    values = [c.priority_confidence for c in claims]
    total = len(values)
    high = sum(1 for v in values if v >= HIGH_CONFIDENCE)
    medium = sum(1 for v in values if MEDIUM_CONFIDENCE <= v < HIGH_CONFIDENCE)
    low = total - high - medium
    overall = OverallConfidence(
        average=round1(_mean(values) * 100),
        min=round1(min(values) * 100) if values else 0.0,
        max=round1(max(values) * 100) if values else 0.0,
        distribution=ConfidenceDistribution(
            high=high,
            high_percent=percent(high, total),
            medium=medium,
            medium_percent=percent(medium, total),
            low=low,
            low_percent=percent(low, total),
        ),
    )
    by_priority = {
        tier: TierConfidence(
            average=round1(_mean([c.priority_confidence for c in group]) * 100), count=len(group)
        )
        for tier, group in _by_tier(claims).items()
    }
    return ConfidenceMetrics(overall=overall, by_priority=by_priority)


def financial_metrics(claims: Sequence[Claim]) -> FinancialMetrics:
    """Billed and approved totals per tier, with each tier's share of billed value."""
    grand_billed = _sum([c.billed_amount for c in claims])
    grand_approved = _sum([c.approved_amount or Decimal(0) for c in claims])
    by_priority: dict[str, TierFinancials] = {}
    for tier, group in _by_tier(claims).items():
        billed = _sum([c.billed_amount for c in group])
        by_priority[tier] = TierFinancials(
            total_billed=to_cents(billed),
            total_approved=to_cents(_sum([c.approved_amount or Decimal(0) for c in group])),
            average_billed=to_cents(billed / len(group)) if group else to_cents(0),
            count=len(group),
            percent_of_total_value=percent(billed, grand_billed),
        )
    return FinancialMetrics(
        overall=FinancialTotals(total_billed=to_cents(grand_billed), total_approved=to_cents(grand_approved)),
        by_priority=by_priority,
    )
