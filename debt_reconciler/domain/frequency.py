"""Installment frequency parsing"""

from datetime import timedelta
from enum import Enum

from debt_reconciler.domain.exceptions import UnrecognizedCadenceError


class Cadence(str, Enum):
    """Installment frequencies supported by payment plans"""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"


_INCREMENTS = {
    Cadence.WEEKLY: timedelta(days=7),
    Cadence.BI_WEEKLY: timedelta(days=14),
}


def parse_cadence(label: str) -> Cadence:
    """
    Normalize an installment frequency label.

    Matching is case-insensitive and accepts "-" or a space in place of "_",
    so "Bi-Weekly" and "bi_weekly" are the same cadence.

    Raises:
        UnrecognizedCadenceError: For any label that is not weekly or bi-weekly
    """
    if not isinstance(label, str):
        raise UnrecognizedCadenceError(str(label))

    normalized = label.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return Cadence(normalized)
    except ValueError as e:
        raise UnrecognizedCadenceError(label) from e


def cadence_increment(label: str) -> timedelta:
    """Fixed time between two installments for the given frequency label"""
    return _INCREMENTS[parse_cadence(label)]
