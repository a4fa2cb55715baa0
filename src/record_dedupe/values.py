"""Loose value handling shared by scorers and merge rules.

Records arrive from spreadsheets, JSON exports and hand-edited YAML, so amounts
and timestamps may be strings, numbers or already-parsed objects. These helpers
turn them into comparable values, returning None instead of raising when a
value cannot be understood.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

_NON_DIGITS = re.compile(r"\D")


def is_blank(value: Any, zero_is_blank: bool = False) -> bool:
    """Check whether a field value counts as unset.

    None, empty strings and whitespace-only strings are blank. With
    ``zero_is_blank`` a numeric value equal to zero is blank too (used for
    price and order total).
    """
    if value is None:
        return True
    if isinstance(value, str):
        if not value.strip():
            return True
        if zero_is_blank:
            amount = to_decimal(value)
            return amount is not None and amount == 0
        return False
    if zero_is_blank and isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return value == 0
    return False


def to_decimal(value: Any) -> Decimal | None:
    """Parse an amount into a Decimal.

    Returns None for blanks, malformed strings, NaN and infinities. Floats are
    converted through their repr so 100.01 stays 100.01.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    text = str(value).strip().replace(",", "").lstrip("$")
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def to_datetime(value: Any) -> datetime | None:
    """Parse a timestamp into a timezone-aware datetime.

    Accepts datetime and date objects and ISO 8601 strings (a trailing ``Z``
    is understood). Naive values are taken as UTC. Returns None when the
    value is blank or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def digits_only(value: Any) -> str:
    """Strip everything but digits (phone normalization)."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def round_half_up(value: float) -> int:
    """Round a non-negative score to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))
