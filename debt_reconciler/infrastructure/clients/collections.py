"""HTTP client for the debts, payment plans and payments collection endpoints"""

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, TypeVar

import httpx

from debt_reconciler.config import settings
from debt_reconciler.domain.exceptions import DataSourceError
from debt_reconciler.domain.models import Debt, Payment, PaymentPlan
from debt_reconciler.infrastructure.observability.metrics import fetch_latency_histogram
from debt_reconciler.utils.date_utils import parse_iso_date

T = TypeVar("T")

DEBTS = "debts"
PAYMENT_PLANS = "payment_plans"
PAYMENTS = "payments"


def _to_decimal(value: Any) -> Decimal:
    # bool is an int subclass; reject it along with anything non-numeric
    if isinstance(value, bool) or not isinstance(value, (int, str, Decimal)):
        raise TypeError(f"Expected decimal amount, got {type(value).__name__}")
    amount = Decimal(value)
    if not amount.is_finite():
        raise ValueError(f"Non-finite amount: {value!r}")
    return amount


def _to_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected integer id, got {type(value).__name__}")
    return value


def parse_debt(raw: dict) -> Debt:
    return Debt(
        id=_to_int(raw["id"]),
        amount=_to_decimal(raw["amount"]),
        is_in_payment_plan=bool(raw.get("is_in_payment_plan", False)),
    )


def parse_payment_plan(raw: dict) -> PaymentPlan:
    return PaymentPlan(
        id=_to_int(raw["id"]),
        debt_id=_to_int(raw["debt_id"]),
        amount_to_pay=_to_decimal(raw["amount_to_pay"]),
        installment_frequency=raw["installment_frequency"],
        installment_amount=_to_decimal(raw["installment_amount"]),
        start_date=parse_iso_date(raw["start_date"]),
    )


def parse_payment(raw: dict) -> Payment:
    return Payment(
        amount=_to_decimal(raw["amount"]),
        date=parse_iso_date(raw["date"]),
        payment_plan_id=_to_int(raw["payment_plan_id"]),
    )


class CollectionsClient:
    """Client for the three read-only collection endpoints"""

    def __init__(
        self,
        debts_url: str | None = None,
        payment_plans_url: str | None = None,
        payments_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.urls = {
            DEBTS: settings.debts_api_url if debts_url is None else debts_url,
            PAYMENT_PLANS: settings.payment_plans_api_url if payment_plans_url is None else payment_plans_url,
            PAYMENTS: settings.payments_api_url if payments_url is None else payments_url,
        }
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_debts(self) -> List[Debt]:
        """
        Fetch every debt.

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        return await self._fetch(DEBTS, parse_debt)

    async def get_payment_plans(self) -> List[PaymentPlan]:
        """
        Fetch every payment plan.

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        return await self._fetch(PAYMENT_PLANS, parse_payment_plan)

    async def get_payments(self) -> List[Payment]:
        """
        Fetch every payment, ordered oldest first.

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        payments = await self._fetch(PAYMENTS, parse_payment)
        return sorted(payments, key=lambda p: p.date)

    async def _fetch(self, source: str, parse: Callable[[dict], T]) -> List[T]:
        url = self.urls[source]
        if not url:
            raise DataSourceError(source, "Invalid server URI")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with fetch_latency_histogram.labels(source=source).time():
                    response = await client.get(url, headers={"Accept": "application/json"})
                response.raise_for_status()

                # Keep amounts exact: JSON numbers with a fraction become Decimal, never float
                data = json.loads(response.text, parse_float=Decimal)
                if not isinstance(data, list):
                    raise TypeError(f"Expected a JSON array, got {type(data).__name__}")

                return [parse(item) for item in data]

            except httpx.TimeoutException as e:
                raise DataSourceError(source, f"timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataSourceError(source, f"unexpected status code {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataSourceError(source, f"request failed: {e}") from e
            except (KeyError, ValueError, TypeError, InvalidOperation) as e:
                raise DataSourceError(source, f"invalid data: {e!r}") from e
