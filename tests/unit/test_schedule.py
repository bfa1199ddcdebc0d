"""Unit tests for frequency parsing and schedule generation"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from debt_reconciler.domain.exceptions import UnrecognizedCadenceError
from debt_reconciler.domain.frequency import Cadence, cadence_increment, parse_cadence
from debt_reconciler.domain.schedule import build_schedule, generate_schedule

from conftest import make_plan


@pytest.mark.parametrize(
    "label, expected",
    [
        ("weekly", Cadence.WEEKLY),
        ("WEEKLY", Cadence.WEEKLY),
        ("bi_weekly", Cadence.BI_WEEKLY),
        ("Bi-Weekly", Cadence.BI_WEEKLY),
        (" bi weekly ", Cadence.BI_WEEKLY),
    ],
)
def test_parse_cadence_case_insensitive(label, expected):
    assert parse_cadence(label) == expected


def test_cadence_increment_days():
    assert cadence_increment("weekly") == timedelta(days=7)
    assert cadence_increment("bi_weekly") == timedelta(days=14)


@pytest.mark.parametrize("label", ["monthly", "", "biweekly", None])
def test_parse_cadence_unrecognized(label):
    with pytest.raises(UnrecognizedCadenceError):
        parse_cadence(label)


def test_generate_schedule_terminal_entry_included():
    """Last entry is the first one at or below zero"""
    entries = list(generate_schedule(date(2020, 1, 1), "weekly", Decimal("100.00"), Decimal("40.00")))

    assert [e.due_date for e in entries] == [
        date(2020, 1, 1),
        date(2020, 1, 8),
        date(2020, 1, 15),
        date(2020, 1, 22),
    ]
    assert [e.anticipated_balance for e in entries] == [
        Decimal("100.00"),
        Decimal("60.00"),
        Decimal("20.00"),
        Decimal("-20.00"),
    ]


def test_generate_schedule_exact_payoff_stops_at_zero():
    entries = list(generate_schedule(date(2020, 1, 1), "bi_weekly", Decimal("75"), Decimal("25")))

    assert len(entries) == 4
    assert entries[-1].anticipated_balance == Decimal("0")
    assert entries[-1].due_date == date(2020, 2, 12)


@pytest.mark.parametrize(
    "frequency, amount, installment",
    [
        ("weekly", "399.00", "25"),
        ("bi_weekly", "123.46", "5.28"),
        ("bi_weekly", "42000.00", "300"),
        ("weekly", "0.03", "0.01"),
    ],
)
def test_generate_schedule_strictly_increasing_by_increment(frequency, amount, installment):
    entries = list(generate_schedule(date(2020, 2, 28), frequency, Decimal(amount), Decimal(installment)))
    increment = cadence_increment(frequency)

    for previous, current in zip(entries, entries[1:]):
        assert current.due_date - previous.due_date == increment
        assert previous.anticipated_balance > 0
    assert entries[-1].anticipated_balance <= 0


def test_generate_schedule_exact_decimal_arithmetic():
    """Thirty 0.10 installments land on exactly zero"""
    entries = list(generate_schedule(date(2020, 1, 1), "weekly", Decimal("3.00"), Decimal("0.10")))

    assert len(entries) == 31
    assert entries[-1].anticipated_balance == Decimal("0.00")


@pytest.mark.parametrize("installment", ["0", "-25"])
def test_generate_schedule_non_positive_installment_terminates(installment):
    entries = list(generate_schedule(date(2020, 1, 1), "weekly", Decimal("100"), Decimal(installment)))

    assert len(entries) == 1
    assert entries[0].due_date == date(2020, 1, 1)


def test_generate_schedule_zero_target_only_start():
    entries = list(generate_schedule(date(2020, 2, 5), "weekly", Decimal("0.00"), Decimal("250.00")))

    assert len(entries) == 1
    assert entries[0].anticipated_balance == Decimal("0.00")


def test_generate_schedule_is_lazy():
    schedule = generate_schedule(date(2020, 1, 1), "weekly", Decimal("1000000"), Decimal("1"))

    first = next(schedule)
    second = next(schedule)
    assert first.due_date == date(2020, 1, 1)
    assert second.due_date == date(2020, 1, 8)


def test_generate_schedule_unrecognized_frequency():
    with pytest.raises(UnrecognizedCadenceError):
        list(generate_schedule(date(2020, 1, 1), "monthly", Decimal("100"), Decimal("10")))


def test_build_schedule_mapping():
    plan = make_plan(3, 3, "399.00", "weekly", "25", "2020-10-21")
    schedule = build_schedule(plan)

    assert len(schedule) == 17
    assert schedule[date(2020, 10, 21)] == Decimal("399.00")
    assert schedule[date(2020, 10, 28)] == Decimal("374.00")
    assert date(2020, 11, 3) not in schedule


def test_build_schedule_target_override():
    plan = make_plan(1, 1, "0.00", "weekly", "175", "2020-01-31")

    assert list(build_schedule(plan)) == [date(2020, 1, 31)]
    assert len(build_schedule(plan, Decimal("1234.00"))) == 9
