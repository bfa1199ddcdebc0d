"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Debt:
    """Debt record from the debts endpoint"""

    id: int
    amount: Decimal
    is_in_payment_plan: bool = False


@dataclass(frozen=True)
class PaymentPlan:
    """Payment plan record from the payment plans endpoint"""

    id: int
    debt_id: int
    amount_to_pay: Decimal
    installment_frequency: str  # raw label, e.g. "weekly" or "bi_weekly"
    installment_amount: Decimal
    start_date: date


@dataclass(frozen=True)
class Payment:
    """Payment record from the payments endpoint"""

    amount: Decimal
    date: date
    payment_plan_id: int


@dataclass(frozen=True)
class ScheduleEntry:
    """Expected installment date and the balance anticipated on that date"""

    due_date: date
    anticipated_balance: Decimal


@dataclass(frozen=True)
class ClassifiedPayment:
    """Payment tagged with whether it landed on a schedule date"""

    payment: Payment
    scheduled: bool

    @property
    def amount(self) -> Decimal:
        return self.payment.amount

    @property
    def date(self) -> date:
        return self.payment.date


@dataclass(frozen=True)
class EnrichedDebt:
    """Output of reconciliation for a single debt"""

    id: int
    amount: Decimal
    is_in_payment_plan: bool
    remaining_amount: Decimal
    next_payment_due_date: Optional[date] = None


@dataclass
class ReconciliationResult:
    """Everything a reconciliation pass produced, including integrity findings"""

    debts: List[EnrichedDebt] = field(default_factory=list)
    orphaned_plans: List[PaymentPlan] = field(default_factory=list)
    orphaned_payments: List[Payment] = field(default_factory=list)
    plan_errors: Dict[int, str] = field(default_factory=dict)  # debt id -> error message
    scheduled_payment_count: int = 0
    unscheduled_payment_count: int = 0

    @property
    def has_orphans(self) -> bool:
        return bool(self.orphaned_plans or self.orphaned_payments)
