"""
Numeric and date helpers shared by the engine modules.
"""

from __future__ import annotations

import math
from datetime import date, datetime


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def to_date(value: date | datetime | str) -> date:
    """Normalize an ISO string, datetime or date to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])
