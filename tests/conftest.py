"""Pytest fixtures for testing"""

import json
import pytest
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List

import httpx
from fastapi.testclient import TestClient

from debt_reconciler.api.dependencies import get_collections_client
from debt_reconciler.api.main import create_app
from debt_reconciler.domain.models import Debt, Payment, PaymentPlan
from debt_reconciler.infrastructure.clients.collections import CollectionsClient

DEBTS_URL = "http://collections.test/debts"
PLANS_URL = "http://collections.test/payment_plans"
PAYMENTS_URL = "http://collections.test/payments"


def make_plan(
    id: int,
    debt_id: int,
    amount_to_pay: str,
    frequency: str,
    installment_amount: str,
    start_date: str,
) -> PaymentPlan:
    return PaymentPlan(
        id=id,
        debt_id=debt_id,
        amount_to_pay=Decimal(amount_to_pay),
        installment_frequency=frequency,
        installment_amount=Decimal(installment_amount),
        start_date=date.fromisoformat(start_date),
    )


def make_payment(plan_id: int, amount: str, on: str) -> Payment:
    return Payment(amount=Decimal(amount), date=date.fromisoformat(on), payment_plan_id=plan_id)


@pytest.fixture
def sample_debts() -> List[Debt]:
    """Debts covering plan/no-plan, degenerate targets and overpayment"""
    return [
        Debt(id=0, amount=Decimal("1500000.00")),
        Debt(id=1, amount=Decimal("1234.00")),
        Debt(id=2, amount=Decimal("50000")),
        Debt(id=3, amount=Decimal("400")),
        Debt(id=4, amount=Decimal("123.46")),
        Debt(id=6, amount=Decimal("4920.34")),
        Debt(id=9, amount=Decimal("0.00")),
        Debt(id=10, amount=Decimal("10000")),  # no payment plan
        Debt(id=11, amount=Decimal("5281")),  # payment made before the plan started
    ]


@pytest.fixture
def sample_plans() -> List[PaymentPlan]:
    return [
        make_plan(0, 0, "1000000.00", "bi_weekly", "1000", "2021-05-31"),
        make_plan(1, 1, "0.00", "weekly", "175", "2020-01-31"),
        make_plan(2, 2, "42000.00", "bi_weekly", "300", "2020-05-28"),
        make_plan(3, 3, "399.00", "weekly", "25", "2020-10-21"),
        make_plan(4, 4, "123.46", "bi_weekly", "5.28", "2020-02-28"),
        make_plan(6, 6, "4500.00", "weekly", "100.00", "2020-08-12"),
        make_plan(9, 9, "0.00", "weekly", "250.00", "2020-02-05"),
        make_plan(11, 11, "5281", "weekly", "25", "2020-11-05"),
    ]


@pytest.fixture
def sample_payments() -> List[Payment]:
    payments = [
        make_payment(1, "50.00", "2021-05-15"),
        # Two payments on the same unscheduled date, then a big one on schedule
        make_payment(2, "725", "2020-06-02"),
        make_payment(2, "1000", "2020-06-02"),
        make_payment(2, "1000.36", "2020-06-28"),
        make_payment(2, "1500.77", "2020-06-28"),
        make_payment(2, "1500.55", "2020-06-29"),
        make_payment(2, "10000.71", "2021-04-01"),
        # None of these land on a weekly date from 2020-10-21
        make_payment(3, "25", "2020-11-03"),
        make_payment(3, "30", "2020-11-17"),
        make_payment(3, "25", "2020-12-01"),
        make_payment(3, "65", "2021-01-01"),
        make_payment(9, "100.00", "2020-09-12"),
        make_payment(11, "125.00", "2020-08-31"),
    ]
    # Fifteen installments of 5.28, each a day after the bi-weekly schedule date
    for on in [
        "2020-03-14", "2020-03-28", "2020-03-14", "2020-04-11", "2020-04-25",
        "2020-05-09", "2020-05-23", "2020-06-06", "2020-06-20", "2020-07-04",
        "2020-07-18", "2020-08-01", "2020-08-15", "2020-08-29", "2020-09-12",
    ]:
        payments.append(make_payment(4, "5.28", on))
    return payments


@pytest.fixture
def collections_payload() -> Dict[str, str]:
    """Raw JSON bodies as the collection endpoints serve them"""
    return {
        DEBTS_URL: json.dumps([
            {"id": 0, "amount": 123.46, "is_in_payment_plan": True},
            {"id": 1, "amount": 100},
            {"id": 2, "amount": 9238.02},
        ]),
        PLANS_URL: json.dumps([
            {
                "id": 0,
                "debt_id": 0,
                "amount_to_pay": 102.5,
                "installment_frequency": "weekly",
                "installment_amount": 51.25,
                "start_date": "2020-09-28",
            },
            {
                "id": 1,
                "debt_id": 1,
                "amount_to_pay": 100,
                "installment_frequency": "weekly",
                "installment_amount": 25,
                "start_date": "2020-08-01",
            },
        ]),
        PAYMENTS_URL: json.dumps([
            {"amount": 51.25, "date": "2020-09-28", "payment_plan_id": 0},
            {"amount": 25, "date": "2020-08-08", "payment_plan_id": 1},
            {"amount": 25, "date": "2020-08-01", "payment_plan_id": 1},
        ]),
    }


@pytest.fixture
def make_client() -> Callable[..., CollectionsClient]:
    """Build a CollectionsClient backed by an in-memory transport"""

    def _make(payload: Dict[str, str], status_codes: Dict[str, int] | None = None) -> CollectionsClient:
        status_codes = status_codes or {}

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            if url not in payload:
                return httpx.Response(404, text="not found")
            return httpx.Response(
                status_codes.get(url, 200),
                text=payload[url],
                headers={"Content-Type": "application/json"},
            )

        return CollectionsClient(
            debts_url=DEBTS_URL,
            payment_plans_url=PLANS_URL,
            payments_url=PAYMENTS_URL,
            timeout=5.0,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def client(make_client, collections_payload) -> TestClient:
    """Create FastAPI test client backed by in-memory collection endpoints"""
    app = create_app()

    app.dependency_overrides[get_collections_client] = lambda: make_client(collections_payload)
    return TestClient(app)
