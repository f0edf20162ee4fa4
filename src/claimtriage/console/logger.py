"""Rich console for the claims CLI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from claimtriage.console.display import (
    print_adjudication,
    print_analytics,
    print_claim,
    print_claim_detail,
    print_claims_table,
    print_config_report,
    print_store_stats,
    print_trends,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from claimtriage.analytics.models import AnalyticsReport, TrendPoint
    from claimtriage.config.settings import ConfigReport
    from claimtriage.core.models import AdjudicationSummary, Claim, ClaimDetail, ClaimSummary


class ClaimsConsole:
    """Rich console interface for claim processing output."""

    def __init__(self, verbose: bool = False) -> None:
        self.console = Console()
        self.verbose = verbose

    def setup_logging(self, level: str = "INFO") -> None:
        logging.basicConfig(
            level=level.upper() if self.verbose else "WARNING",
            format="%(message)s",
            handlers=[
                RichHandler(
                    console=self.console, rich_tracebacks=True, show_time=False, show_path=False
                )
            ],
            force=True,
        )

    def print_claim(self, claim: Claim) -> None:
        print_claim(self.console, claim)

    def print_adjudication(self, summary: AdjudicationSummary) -> None:
        print_adjudication(self.console, summary)

    def print_claim_detail(self, detail: ClaimDetail) -> None:
        print_claim_detail(self.console, detail)

    def print_claims(self, claims: list[ClaimSummary]) -> None:
        print_claims_table(self.console, claims)

    def print_analytics(self, report: AnalyticsReport) -> None:
        print_analytics(self.console, report)

    def print_trends(self, points: Iterable[TrendPoint]) -> None:
        print_trends(self.console, points)

    def print_store_stats(self, stats: dict[str, Any]) -> None:
        print_store_stats(self.console, stats)

    def print_config_report(self, report: ConfigReport) -> None:
        print_config_report(self.console, report.valid, report.warnings, report.errors)

    def print_json(self, data: str) -> None:
        self.console.print_json(data)

    def print_success(self, message: str, output_path: str | None = None) -> None:
        body = f"[green]✓ {message}[/green]"
        if output_path:
            body += f"\n\n[bold]Output:[/bold] {output_path}"
        self.console.print()
        self.console.print(Panel(body, title="[green]Complete[/green]", border_style="green"))

    def print_error(self, error: str, details: dict[str, Any] | None = None) -> None:
        body = f"[red]{error}[/red]"
        for field, message in (details or {}).items():
            body += f"\n  [bold]{field}[/bold]: {message}"
        self.console.print()
        self.console.print(Panel(body, title="[red]Error[/red]", border_style="red"))
