"""Reconciliation engine - joins debts, plans and payments and derives balances and due dates"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from functools import cached_property
from typing import Dict, Iterable, List, Optional

from debt_reconciler.domain.balance import calculate_remaining_amount, is_paid_off, payoff_target
from debt_reconciler.domain.classifier import classify_payments
from debt_reconciler.domain.exceptions import OrphanedRecordsError, UnrecognizedCadenceError
from debt_reconciler.domain.models import (
    ClassifiedPayment,
    Debt,
    EnrichedDebt,
    Payment,
    PaymentPlan,
    ReconciliationResult,
)
from debt_reconciler.domain.next_due import NextDueFallback, resolve_next_due_date
from debt_reconciler.domain.schedule import build_schedule

logger = logging.getLogger(__name__)


@dataclass
class DebtAccount:
    """A debt joined with its plan and that plan's payments"""

    debt: Debt
    plan: Optional[PaymentPlan] = None
    payments: List[ClassifiedPayment] = field(default_factory=list)  # oldest first
    schedule: Dict[date, Decimal] = field(default_factory=dict)

    @cached_property
    def remaining_amount(self) -> Decimal:
        # Computed once; later changes to payments are not reflected
        return calculate_remaining_amount(self.debt, self.plan, self.payments)

    @property
    def is_paid_off(self) -> bool:
        return is_paid_off(self.remaining_amount)

    @property
    def is_plan_active(self) -> bool:
        return self.plan is not None and not self.is_paid_off


def reconcile(
    debts: Iterable[Debt],
    plans: Iterable[PaymentPlan],
    payments: Iterable[Payment],
    *,
    grace_period_days: int = 0,
    fallback: NextDueFallback = NextDueFallback.START_DATE,
    strict_integrity: bool = False,
) -> ReconciliationResult:
    """
    Build the debt hierarchy and derive remaining balance and next due date.

    Flow per debt (ascending id):
    1. Attach the plan whose debt_id matches (removed from the free pool)
    2. Attach that plan's payments, oldest first
    3. Generate the schedule and classify payments against it
    4. Compute the remaining amount
    5. Resolve the next due date while the plan is still active

    An unrecognized installment frequency only affects its own debt: the
    balance is still computed, the due date stays unset, and the error is
    recorded in plan_errors.

    Plans and payments left unattached afterwards are orphans. They never
    reach the output; they are reported on the result, or raised as
    OrphanedRecordsError when strict_integrity is set.
    """
    # First plan per debt id is attached; any duplicate stays in the pool
    plan_pool: Dict[int, List[PaymentPlan]] = {}
    for plan in plans:
        plan_pool.setdefault(plan.debt_id, []).append(plan)

    payments_by_plan: Dict[int, List[Payment]] = {}
    for pmt in payments:
        payments_by_plan.setdefault(pmt.payment_plan_id, []).append(pmt)

    result = ReconciliationResult()

    for debt in sorted(debts, key=lambda d: d.id):
        account = DebtAccount(debt=debt)
        candidates = plan_pool.get(debt.id)

        if not candidates:
            result.debts.append(_enrich(account, next_due=None))
            continue

        account.plan = candidates.pop(0)
        raw_payments = sorted(payments_by_plan.pop(account.plan.id, []), key=lambda p: p.date)

        next_due = None
        try:
            account.schedule = build_schedule(account.plan, payoff_target(debt, account.plan))
            account.payments = classify_payments(raw_payments, account.schedule, grace_period_days)
            if account.is_plan_active:
                next_due = resolve_next_due_date(account.plan, account.payments, fallback)
        except UnrecognizedCadenceError as e:
            logger.warning(
                f"Skipping schedule for debt {debt.id}: {e}",
                extra={"debt_id": debt.id, "payment_plan_id": account.plan.id},
            )
            result.plan_errors[debt.id] = str(e)
            account.payments = [ClassifiedPayment(payment=pmt, scheduled=False) for pmt in raw_payments]

        scheduled = sum(1 for pmt in account.payments if pmt.scheduled)
        result.scheduled_payment_count += scheduled
        result.unscheduled_payment_count += len(account.payments) - scheduled

        result.debts.append(_enrich(account, next_due=next_due))

    result.orphaned_plans = [plan for leftovers in plan_pool.values() for plan in leftovers]
    result.orphaned_payments = [pmt for leftovers in payments_by_plan.values() for pmt in leftovers]

    if result.has_orphans:
        logger.error(
            "Data integrity violation: orphaned records after join",
            extra={
                "orphaned_plan_ids": [plan.id for plan in result.orphaned_plans],
                "orphaned_payment_count": len(result.orphaned_payments),
            },
        )
        if strict_integrity:
            raise OrphanedRecordsError(result)

    return result


def _enrich(account: DebtAccount, next_due: Optional[date]) -> EnrichedDebt:
    return EnrichedDebt(
        id=account.debt.id,
        amount=account.debt.amount,
        is_in_payment_plan=account.is_plan_active,
        remaining_amount=account.remaining_amount,
        next_payment_due_date=next_due,
    )
