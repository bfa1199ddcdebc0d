"""Date manipulation utilities"""

from datetime import date
from typing import Iterable


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date (no time component)"""
    if not isinstance(value, str):
        raise TypeError(f"Expected ISO date string, got {type(value).__name__}")
    return date.fromisoformat(value)


def within_days(candidate: date, targets: Iterable[date], days: int) -> bool:
    """True if candidate is at most `days` calendar days from any target date"""
    return any(abs((candidate - target).days) <= days for target in targets)
