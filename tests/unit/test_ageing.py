"""Unit tests for ageing buckets"""

import pytest
from datetime import timedelta
from decimal import Decimal
from conftest import make_transaction
from ledger_gateway.domain.ageing import ageing_for, bucket_for, calculate_ageing
from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.utils.date_utils import days_overdue


@pytest.mark.parametrize(
    "days_ago, bucket",
    [
        (-10, "current"),
        (0, "current"),
        (1, "days1to30"),
        (30, "days1to30"),
        (31, "days31to60"),
        (60, "days31to60"),
        (61, "days60plus"),
        (400, "days60plus"),
    ],
)
def test_bucket_boundaries(today, days_ago, bucket):
    """Due 30 days ago is 1-30, 31 and 60 are 31-60, 61 is 60+"""
    ageing = calculate_ageing([(Decimal("100"), today - timedelta(days=days_ago))], today)

    assert getattr(ageing, bucket) == Decimal("100")
    assert ageing.total == Decimal("100")


def test_bucket_sum_equals_total_outstanding_exactly(today):
    """Decimal sums: no drift however many small balances are added"""
    entries = [(Decimal("0.10"), today - timedelta(days=i % 90)) for i in range(1000)]
    entries += [(Decimal("1234.56"), None), (Decimal("0.01"), today - timedelta(days=61))]

    ageing = calculate_ageing(entries, today)

    expected = sum((amount for amount, _ in entries), Decimal("0"))
    assert ageing.current + ageing.days1to30 + ageing.days31to60 + ageing.days60plus == expected
    assert ageing.total == expected
    assert ageing.count == len(entries)


def test_missing_due_date_is_current(today):
    ageing = calculate_ageing([(Decimal("500"), None)], today)
    assert ageing.current == Decimal("500")


def test_zero_balances_are_excluded(today):
    ageing = calculate_ageing(
        [(Decimal("0"), today - timedelta(days=90)), (Decimal("0.00"), None), (Decimal("10"), today)],
        today,
    )

    assert ageing.days60plus == Decimal("0")
    assert ageing.count == 1
    assert ageing.total == Decimal("10")


def test_negative_balance_raises(today):
    with pytest.raises(ValidationError):
        calculate_ageing([(Decimal("-5"), today)], today)


def test_malformed_due_date_raises_instead_of_defaulting_to_current(today):
    with pytest.raises(ValidationError):
        calculate_ageing([(Decimal("5"), "2026-10-01")], today)


def test_bucket_and_badge_agree_on_overdue_boundary(today):
    """The bucket and the days-overdue badge both come from days_overdue"""
    for days_ago in range(-3, 70):
        due = today - timedelta(days=days_ago)
        badge = days_overdue(due, today)
        bucket = bucket_for(badge)
        assert (badge == 0) == (bucket == "current")

    assert days_overdue(today, today) == 0
    assert bucket_for(days_overdue(today, today)) == "current"


def test_receivables_ageing_scenario(today, sample_transactions):
    """Three customers, four open invoices and one paid invoice"""
    ageing = ageing_for(sample_transactions, "sales_invoice", today)

    assert ageing.current == Decimal("1000")
    assert ageing.days1to30 == Decimal("2000")
    assert ageing.days31to60 == Decimal("1500")
    assert ageing.days60plus == Decimal("3000")
    assert ageing.total == Decimal("7500")
    assert ageing.count == 4


def test_ageing_for_only_uses_open_statuses_of_the_type(today):
    transactions = [
        make_transaction(id=1, status="pending"),
        make_transaction(id=2, status="using_bnpl"),
        make_transaction(id=3, status="sent"),
        make_transaction(id=4, status="draft"),
        make_transaction(id=5, transaction_type="purchase_bill", status="pending"),
    ]

    receivables = ageing_for(transactions, "sales_invoice", today)
    payables = ageing_for(transactions, "purchase_bill", today)

    assert receivables.total == Decimal("1000")
    assert receivables.count == 1
    assert payables.total == Decimal("1000")
    assert payables.count == 1
