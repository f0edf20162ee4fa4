"""Report rendering."""

from claimtriage.reporting.html import HTMLReportWriter

__all__ = ["HTMLReportWriter"]
