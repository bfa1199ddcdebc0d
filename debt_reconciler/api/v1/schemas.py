"""Pydantic schemas for API and report serialization"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

import simplejson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from debt_reconciler.domain.models import EnrichedDebt, ReconciliationResult


class DebtResponse(BaseModel):
    """Single enriched debt"""

    id: int
    amount: Decimal
    is_in_payment_plan: bool
    remaining_amount: Decimal
    next_payment_due_date: Optional[date] = None

    @classmethod
    def from_domain(cls, debt: EnrichedDebt) -> "DebtResponse":
        return cls(
            id=debt.id,
            amount=debt.amount,
            is_in_payment_plan=debt.is_in_payment_plan,
            remaining_amount=debt.remaining_amount,
            next_payment_due_date=debt.next_payment_due_date,
        )


class OrphanedRecordsResponse(BaseModel):
    """Integrity report returned when strict integrity rejects a snapshot"""

    detail: str
    orphaned_plan_ids: List[int]
    orphaned_payment_count: int


def _encode_date(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_exact(content: Any, indent: int | None = None) -> str:
    """
    Serialize to JSON with Decimal amounts written as bare numeric literals.

    The Decimal's own text is emitted, so 1184.00 stays 1184.00 and large
    amounts keep every digit.
    """
    separators = None if indent is not None else (",", ":")
    return simplejson.dumps(
        content,
        use_decimal=True,
        indent=indent,
        separators=separators,
        default=_encode_date,
    )


class ExactDecimalResponse(JSONResponse):
    """JSON response that never routes amounts through binary floating point"""

    def render(self, content: Any) -> bytes:
        return dumps_exact(content).encode("utf-8")


def debt_payload(debts: List[EnrichedDebt]) -> List[dict]:
    return [DebtResponse.from_domain(d).model_dump() for d in debts]


def render_report(result: ReconciliationResult, indent: int | None = 3) -> str:
    """Serialize enriched debts as the JSON array printed by the CLI"""
    return dumps_exact(debt_payload(result.debts), indent=indent)
