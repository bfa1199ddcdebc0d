"""Remaining balance calculation - payments netted against the payoff target"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from debt_reconciler.domain.models import ClassifiedPayment, Debt, Payment, PaymentPlan

CENT = Decimal("0.01")


def round_currency(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_payments(payments: Iterable[Payment | ClassifiedPayment]) -> Decimal:
    """Exact sum of payment amounts, rounded to cents once at the end"""
    total = sum((pmt.amount for pmt in payments), Decimal("0"))
    return round_currency(total)


def payoff_target(debt: Debt, plan: Optional[PaymentPlan]) -> Decimal:
    """
    Amount the payments are netted against.

    The plan's amount_to_pay wins when a plan is attached, unless it is zero
    or negative; a degenerate plan target must not wipe out the debt, so the
    debt's own amount is used instead.
    """
    if plan is not None and plan.amount_to_pay > 0:
        return plan.amount_to_pay
    return debt.amount


def calculate_remaining_amount(
    debt: Debt,
    plan: Optional[PaymentPlan],
    payments: Iterable[Payment | ClassifiedPayment],
) -> Decimal:
    """Payoff target minus everything paid so far, rounded to cents"""
    return round_currency(payoff_target(debt, plan) - sum_payments(payments))


def is_paid_off(remaining_amount: Decimal) -> bool:
    """Zero or negative remaining means paid off (overpayment included)"""
    return remaining_amount <= 0
