"""Next payment due date resolution"""

from datetime import date
from enum import Enum
from typing import Sequence

from debt_reconciler.domain.frequency import cadence_increment
from debt_reconciler.domain.models import ClassifiedPayment, PaymentPlan


class NextDueFallback(str, Enum):
    """Where the next due date lands when no payment matched the schedule"""

    START_DATE = "start_date"
    START_DATE_PLUS_INCREMENT = "start_date_plus_increment"


def resolve_next_due_date(
    plan: PaymentPlan,
    payments: Sequence[ClassifiedPayment],
    fallback: NextDueFallback = NextDueFallback.START_DATE,
) -> date:
    """
    Project the next installment date from the payment history.

    Payments are expected oldest first. Walking from the most recent one,
    the first scheduled payment anchors the projection: its date plus one
    cadence increment. Unscheduled payments are skipped.

    When no payment is scheduled the fallback policy applies:
    - START_DATE: the plan's start date (nothing validated yet)
    - START_DATE_PLUS_INCREMENT: one increment past the start date

    A plan with no payments at all is due on its start date.

    Raises:
        UnrecognizedCadenceError: If the plan's frequency is not supported
    """
    increment = cadence_increment(plan.installment_frequency)

    if not payments:
        return plan.start_date

    for pmt in reversed(payments):
        if not pmt.scheduled:
            continue
        return pmt.date + increment

    if fallback == NextDueFallback.START_DATE_PLUS_INCREMENT:
        return plan.start_date + increment
    return plan.start_date
