"""Display components for console output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console

    from claimtriage.analytics.models import AnalyticsReport, TrendPoint
    from claimtriage.core.models import AdjudicationSummary, Claim, ClaimDetail, ClaimSummary

PRIORITY_STYLES = {"URGENT": "bold red", "STANDARD": "yellow", "ROUTINE": "green"}
STATUS_STYLES = {"submitted": "cyan", "approved": "green", "denied": "red"}


def _priority(value: str) -> str:
    style = PRIORITY_STYLES.get(value, "white")
    return f"[{style}]{value}[/{style}]"


def _status(value: str) -> str:
    style = STATUS_STYLES.get(value, "white")
    return f"[{style}]{value}[/{style}]"


def _confidence(value: float) -> str:
    pct = value * 100
    color = "green" if pct >= 90 else "yellow" if pct >= 70 else "red"
    return f"[{color}]{pct:.0f}%[/{color}]"


def print_claim(console: Console, claim: Claim) -> None:
    """Print a newly submitted claim."""
    body = Text()
    body.append("Claim: ", style="bold")
    body.append(f"{claim.claim_number}\n", style="cyan")
    body.append("Patient: ", style="bold")
    body.append(f"{claim.patient_name}\n")
    body.append("Service: ", style="bold")
    body.append(f"CPT {claim.cpt_code} / ICD-10 {claim.icd10_code} on {claim.service_date}\n")
    body.append("Billed: ", style="bold")
    body.append(f"${claim.billed_amount:,.2f}\n")
    body.append("Priority: ", style="bold")
    body.append(claim.priority.value, style=PRIORITY_STYLES[claim.priority.value])
    body.append(f" ({claim.priority_confidence * 100:.0f}% confidence)\n")
    body.append(claim.priority_reasoning, style="dim")
    console.print(Panel(body, title="Claim Submitted", border_style="blue"))


def print_adjudication(console: Console, summary: AdjudicationSummary) -> None:
    """Print the outcome of an adjudication."""
    lines = [f"[bold]Status:[/bold] {_status(summary.status.value)}"]
    if summary.approved_amount is not None:
        lines.append(f"[bold]Approved:[/bold] ${summary.approved_amount:,.2f}")
    if summary.adjudication_notes:
        lines.append(f"[bold]Notes:[/bold] {summary.adjudication_notes}")
    if summary.denial_reason_code:
        lines.append(f"[bold]Reason:[/bold] {summary.denial_reason_code}")
        lines.append(f"[dim]{summary.denial_explanation}[/dim]")
    lines.append(f"[bold]By:[/bold] {summary.adjudicated_by.name} <{summary.adjudicated_by.email}>")
    lines.append(f"[bold]At:[/bold] {summary.adjudicated_at:%Y-%m-%d %H:%M UTC}")
    console.print(Panel("\n".join(lines), title=summary.claim_number, border_style="green"))


def print_claim_detail(console: Console, detail: ClaimDetail) -> None:
    """Print a claim with its audit trail."""
    claim = detail.claim
    table = Table(title=f"Claim {claim.claim_number}", border_style="blue", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Status", _status(claim.status.value))
    table.add_row("Provider", f"{detail.provider.name} (NPI {detail.provider.npi})")
    table.add_row("Patient", f"{claim.patient_name}, DOB {claim.patient_dob}, member {claim.patient_member_id}")
    table.add_row("Service", f"CPT {claim.cpt_code} / ICD-10 {claim.icd10_code} on {claim.service_date}")
    table.add_row("Billed", f"${claim.billed_amount:,.2f}")
    table.add_row("Priority", f"{_priority(claim.priority.value)} {_confidence(claim.priority_confidence)}")
    table.add_row("Reasoning", claim.priority_reasoning)
    table.add_row("Submitted", f"{claim.submitted_at:%Y-%m-%d %H:%M} by {detail.submitted_by.name}")
    if detail.adjudicated_by and claim.adjudicated_at:
        table.add_row("Adjudicated", f"{claim.adjudicated_at:%Y-%m-%d %H:%M} by {detail.adjudicated_by.name}")
    if claim.approved_amount is not None:
        table.add_row("Approved", f"${claim.approved_amount:,.2f}")
    if claim.denial_reason_code:
        table.add_row("Denial", f"{claim.denial_reason_code}: {claim.denial_explanation}")
    console.print(table)

    trail = Table(title="Audit Trail", border_style="dim")
    trail.add_column("When", style="dim")
    trail.add_column("Action")
    trail.add_column("By")
    trail.add_column("Transition")
    for item in detail.audit_trail:
        old = item.old_status.value if item.old_status else "-"
        trail.add_row(
            f"{item.timestamp:%Y-%m-%d %H:%M:%S}",
            item.action.value,
            item.performed_by,
            f"{old} -> {item.new_status.value}",
        )
    console.print(trail)


def print_claims_table(console: Console, claims: list[ClaimSummary]) -> None:
    """Print a claims listing."""
    if not claims:
        console.print("  [yellow]⚠[/yellow] No claims found")
        return
    table = Table(title="Claims", border_style="blue")
    table.add_column("Claim #", style="cyan")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Conf", justify="right")
    table.add_column("Patient")
    table.add_column("Provider")
    table.add_column("Billed", justify="right")
    table.add_column("Age (d)", justify="right")
    for c in claims:
        table.add_row(
            c.claim_number,
            _status(c.status.value),
            _priority(c.priority.value),
            _confidence(c.priority_confidence),
            c.patient_name,
            c.provider_name,
            f"${c.billed_amount:,.2f}",
            str(c.days_since_submission),
        )
    console.print(table)


def print_analytics(console: Console, report: AnalyticsReport) -> None:
    """Print the analytics overview."""
    period = report.period
    console.print(
        Panel(
            f"[bold]Window:[/bold] {period.start_date:%Y-%m-%d} to {period.end_date:%Y-%m-%d} "
            f"({period.days} days)\n[bold]Claims:[/bold] {report.distribution.total}",
            title="Claims Analytics",
            border_style="blue",
        )
    )

    table = Table(title="Processing by Priority", border_style="blue")
    for column in ("Priority", "Claims", "Share", "Decided", "Avg Hours", "SLA", "SLA Met", "Approval", "Billed"):
        table.add_column(column, justify="left" if column == "Priority" else "right")
    for tier, share in report.distribution.by_priority.items():
        timing = report.time_metrics[tier]
        table.add_row(
            _priority(tier),
            str(share.count),
            f"{share.percentage}%",
            str(timing.count),
            f"{timing.average_hours}",
            f"{timing.sla_target_hours}h",
            f"{timing.sla_compliance_percent}%",
            f"{report.approval_metrics.by_priority[tier].approval_rate}%",
            f"${report.financial_metrics.by_priority[tier].total_billed:,.2f}",
        )
    console.print(table)

    conf = report.confidence_metrics.overall
    dist = conf.distribution
    console.print(
        f"[bold]Confidence:[/bold] avg {conf.average}% (min {conf.min}%, max {conf.max}%)  "
        f"[green]high {dist.high} ({dist.high_percent}%)[/green]  "
        f"[yellow]medium {dist.medium} ({dist.medium_percent}%)[/yellow]  "
        f"[red]low {dist.low} ({dist.low_percent}%)[/red]"
    )
    approvals = report.approval_metrics.overall
    console.print(
        f"[bold]Approval:[/bold] {approvals.approval_rate}% "
        f"({approvals.approved} approved, {approvals.denied} denied), "
        f"${approvals.total_approved:,.2f} approved of ${approvals.total_billed:,.2f} decided"
    )
    print_comparison(console, report)


def print_comparison(console: Console, report: AnalyticsReport) -> None:
    comparison = report.comparison_metrics
    table = Table(title="Prioritized vs FIFO Baseline (Estimated)", border_style="dim")
    table.add_column("Priority")
    table.add_column("Avg Hours", justify="right")
    table.add_column("FIFO Hours (est.)", justify="right")
    table.add_column("SLA", justify="right")
    table.add_column("FIFO SLA (est.)", justify="right")
    table.add_column("Hours Saved", justify="right")
    for tier, actual in comparison.with_prioritization.items():
        baseline = comparison.without_prioritization[tier]
        gain = comparison.improvement.get(tier)
        table.add_row(
            _priority(tier),
            f"{actual.average_hours}",
            f"{baseline.average_hours}",
            f"{actual.sla_compliance}%",
            f"{baseline.sla_compliance}%",
            f"{gain.time_saved_hours} ({gain.time_saved_percent}%)" if gain else "-",
        )
    console.print(table)
    console.print(f"[dim]{comparison.note}[/dim]")


def print_trends(console: Console, points: Iterable[TrendPoint]) -> None:
    table = Table(title="Daily Submissions", border_style="blue")
    for column in ("Date", "Urgent", "Standard", "Routine", "Total"):
        table.add_column(column, justify="left" if column == "Date" else "right")
    for p in points:
        table.add_row(str(p.day), str(p.urgent), str(p.standard), str(p.routine), str(p.total))
    console.print(table)


def print_store_stats(console: Console, stats: dict[str, Any]) -> None:
    """Print claim store statistics."""
    table = Table(title="Claim Store", border_style="blue")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Providers", str(stats["providers"]))
    table.add_row("Users", str(stats["users"]))
    table.add_row("Claims", str(stats["claims"]))
    for status, count in stats.get("by_status", {}).items():
        table.add_row(f"  {status.title()}", str(count))
    table.add_row("Audit Entries", str(stats["audit_entries"]))
    console.print()
    console.print(table)


def print_config_report(console: Console, valid: bool, warnings: list[str], errors: list[str]) -> None:
    for error in errors:
        console.print(f"  [red]✗[/red] {error}")
    for warning in warnings:
        console.print(f"  [yellow]⚠[/yellow] {warning}")
    if valid:
        console.print("  [green]✓[/green] Configuration is valid")
