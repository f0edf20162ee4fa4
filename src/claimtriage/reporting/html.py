"""HTML analytics report generation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import DictLoader, Environment, select_autoescape

from claimtriage.core.errors import StorageError
from claimtriage.templates.report_template import ANALYTICS_TEMPLATE


if TYPE_CHECKING:
    from claimtriage.analytics.models import AnalyticsReport, TrendPoint

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "analytics.html"


def money(value: Decimal | float | int) -> str:
    return f"${Decimal(str(value)):,.2f}"


class HTMLReportWriter:
    """Renders an analytics report to a standalone HTML page."""

    def __init__(self, template: str = ANALYTICS_TEMPLATE) -> None:
        self._env = Environment(
            loader=DictLoader({TEMPLATE_NAME: template}),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self._env.filters["money"] = money

    def render(
        self,
        report: AnalyticsReport,
        trends: list[TrendPoint] | None = None,
        title: str = "Claims Analytics",
    ) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            title=title,
            report=report,
            trends=trends or [],
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        )

    def write(
        self,
        report: AnalyticsReport,
        output_path: str | Path,
        trends: list[TrendPoint] | None = None,
        title: str = "Claims Analytics",
    ) -> Path:
        html_content = self.render(report, trends, title)
        output = Path(output_path)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html_content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write report: {e}", details={"path": str(output)}) from e
        logger.info("Wrote analytics report to %s (%d bytes)", output, len(html_content))
        return output.absolute()
