"""Claim number issuance.

Numbers look like ``CLM-20261019-0042``: a per-day sequence starting at 0001.
The counter lives in ``claim_sequences`` and is bumped with a single upsert, so
the caller's write transaction (``BEGIN IMMEDIATE``) is what serializes
concurrent issuers. A rolled-back transaction rolls its increment back too.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import TYPE_CHECKING

from claimtriage.core.errors import SequenceExhaustedError


if TYPE_CHECKING:
    import sqlite3

PREFIX = "CLM"
MAX_SEQUENCE = 9999
CLAIM_NUMBER_RE = re.compile(rf"^{PREFIX}-(\d{{8}})-(\d{{4}})$")


def format_claim_number(day: date, sequence: int) -> str:
    return f"{PREFIX}-{day:%Y%m%d}-{sequence:04d}"


def parse_claim_number(claim_number: str) -> tuple[date, int]:
    """Split a claim number into its date and sequence parts."""
    match = CLAIM_NUMBER_RE.match(claim_number)
    if not match:
        msg = f"Not a claim number: {claim_number!r}"
        raise ValueError(msg)
    return datetime.strptime(match.group(1), "%Y%m%d").date(), int(match.group(2))


class SequenceIssuer:
    """Hands out the next claim number for a day.

    Must be called inside a write transaction on ``conn``.
    """

    def __init__(self, max_sequence: int = MAX_SEQUENCE) -> None:
        self.max_sequence = max_sequence

    def issue(self, conn: sqlite3.Connection, day: date) -> str:
        """Increment the counter for ``day`` and return the new claim number.

        Raises:
            SequenceExhaustedError: the day's sequence would pass ``max_sequence``.
        """
        day_key = day.isoformat()
        conn.execute(
            """INSERT INTO claim_sequences (day, last_value) VALUES (?, 1)
            ON CONFLICT(day) DO UPDATE SET last_value = last_value + 1""",
            (day_key,),
        )
        value = conn.execute(
            "SELECT last_value FROM claim_sequences WHERE day = ?", (day_key,)
        ).fetchone()[0]
        if value > self.max_sequence:
            msg = f"Claim number sequence exhausted for {day_key} (max {self.max_sequence})"
            raise SequenceExhaustedError(msg, details={"day": day_key})
        return format_claim_number(day, value)
