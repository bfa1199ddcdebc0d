"""Scheduled vs unscheduled payment classification"""

from datetime import date
from decimal import Decimal
from typing import Collection, Dict, Iterable, List

from debt_reconciler.domain.models import ClassifiedPayment, Payment
from debt_reconciler.utils.date_utils import within_days


def is_scheduled_date(
    payment_date: date,
    schedule_dates: Collection[date],
    grace_period_days: int = 0,
) -> bool:
    """
    Check whether a payment date satisfies the schedule.

    With no grace period (the default) the date must be an exact schedule
    date. A positive grace period accepts dates up to that many days either
    side of a schedule date.
    """
    if payment_date in schedule_dates:
        return True
    if grace_period_days > 0:
        return within_days(payment_date, schedule_dates, grace_period_days)
    return False


def classify_payments(
    payments: Iterable[Payment],
    schedule: Dict[date, Decimal],
    grace_period_days: int = 0,
) -> List[ClassifiedPayment]:
    """
    Tag each payment as scheduled or unscheduled, preserving order.

    Unscheduled payments still count toward the balance but never move the
    next due date.
    """
    schedule_dates = schedule.keys()
    return [
        ClassifiedPayment(
            payment=pmt,
            scheduled=is_scheduled_date(pmt.date, schedule_dates, grace_period_days),
        )
        for pmt in payments
    ]
