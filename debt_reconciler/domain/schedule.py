"""Expected installment schedule reconstruction for payment plans"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterator, Optional

from debt_reconciler.domain.frequency import cadence_increment
from debt_reconciler.domain.models import PaymentPlan, ScheduleEntry

logger = logging.getLogger(__name__)


def generate_schedule(
    start_date: date,
    frequency: str,
    amount_to_pay: Decimal,
    installment_amount: Decimal,
) -> Iterator[ScheduleEntry]:
    """
    Lazily generate the expected installment schedule of a plan.

    Requirements:
    - First entry is (start_date, amount_to_pay)
    - Each following entry is one cadence increment later and one
      installment lower
    - Stops after the first entry at or below zero (that entry is included)
    - A non-positive installment never pays anything down, so only the
      start entry is produced

    Raises:
        UnrecognizedCadenceError: If the frequency label is not supported

    Example:
        start 2020-01-01, weekly, 100.00 to pay, 40.00 installments
        → (01-01, 100.00), (01-08, 60.00), (01-15, 20.00), (01-22, -20.00)
    """
    increment = cadence_increment(frequency)

    running_date = start_date
    anticipated_balance = amount_to_pay
    yield ScheduleEntry(due_date=running_date, anticipated_balance=anticipated_balance)

    if installment_amount <= 0:
        logger.warning(
            "Non-positive installment amount, schedule truncated to start date",
            extra={"installment_amount": str(installment_amount), "start_date": start_date.isoformat()},
        )
        return

    while anticipated_balance > 0:
        running_date = running_date + increment
        anticipated_balance = anticipated_balance - installment_amount
        yield ScheduleEntry(due_date=running_date, anticipated_balance=anticipated_balance)


def build_schedule(plan: PaymentPlan, amount_to_pay: Optional[Decimal] = None) -> Dict[date, Decimal]:
    """
    Materialize a plan's schedule as a date -> anticipated balance mapping.

    amount_to_pay overrides the plan's own target, so the schedule can run
    down the same balance the remaining amount is computed from.
    """
    return {
        entry.due_date: entry.anticipated_balance
        for entry in generate_schedule(
            plan.start_date,
            plan.installment_frequency,
            plan.amount_to_pay if amount_to_pay is None else amount_to_pay,
            plan.installment_amount,
        )
    }
