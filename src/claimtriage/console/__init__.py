"""Console output for the claims CLI."""

from claimtriage.console.logger import ClaimsConsole

__all__ = ["ClaimsConsole"]
