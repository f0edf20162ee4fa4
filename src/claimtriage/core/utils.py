"""Utility functions shared across the claim processing modules."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from pydantic import ValidationError


CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def extract_json_from_response(content: str) -> str:
    """Extract JSON string from LLM response content.

    Handles JSON wrapped in markdown code blocks (```json or ```)
    or plain JSON text.

    Args:
        content: LLM response content that may contain JSON.

    Returns:
        Extracted JSON string, stripped of markdown formatting.
    """
    json_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", content)
    return json_match.group(1).strip() if json_match else content.strip()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalize aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_age(dob: date | None, today: date | None = None) -> int | None:
    """Whole years between ``dob`` and ``today``."""
    if dob is None:
        return None
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def round1(value: float | Decimal) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(TENTHS, rounding=ROUND_HALF_UP))


def to_cents(value: Decimal | float | int) -> Decimal:
    """Round a currency amount half-up to cent precision."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def is_whole_cents(value: Decimal) -> bool:
    """True when ``value`` carries no precision below one cent."""
    return value == value.quantize(CENTS)


def percent(part: float | Decimal, whole: float | Decimal) -> float:
    """``part / whole`` as a percentage rounded to one decimal, 0 when ``whole`` is 0."""
    if not whole:
        return 0.0
    return round1(Decimal(str(part)) / Decimal(str(whole)) * 100)


def validation_details(exc: ValidationError) -> dict[str, Any]:
    """Flatten a pydantic ValidationError into ``{"field.path": "message"}``."""
    details: dict[str, Any] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        details[field] = err.get("msg", "Invalid value")
    return details
