"""Unit tests for overdue-day calculation and API date parsing"""

import pytest
from datetime import date, datetime, timedelta
from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.utils.date_utils import days_between, days_overdue, parse_api_date


def test_days_overdue_due_today_is_zero():
    today = date(2026, 10, 18)
    assert days_overdue(today, today) == 0


def test_days_overdue_future_and_missing_due_date():
    today = date(2026, 10, 18)
    assert days_overdue(today + timedelta(days=5), today) == 0
    assert days_overdue(None, today) == 0


def test_days_overdue_counts_whole_days():
    today = date(2026, 10, 18)
    assert days_overdue(today - timedelta(days=1), today) == 1
    assert days_overdue(today - timedelta(days=61), today) == 61


def test_days_overdue_rounds_partial_days_up():
    """A due time a few hours in the past is already one day overdue"""
    now = datetime(2026, 10, 18, 15, 0)
    assert days_overdue(datetime(2026, 10, 18, 9, 0), now) == 1
    assert days_overdue(datetime(2026, 10, 16, 16, 0), now) == 2
    assert days_overdue(datetime(2026, 10, 18, 15, 0), now) == 0


def test_days_between_is_signed():
    assert days_between(date(2026, 10, 18), date(2026, 10, 20)) == 2
    assert days_between(date(2026, 10, 20), date(2026, 10, 18)) == -2


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("2026-10-18", date(2026, 10, 18)),
        ("2026-10-18T00:00:00.000Z", date(2026, 10, 18)),
        ("2026-10-18T23:15:00+05:30", date(2026, 10, 18)),
        (datetime(2026, 10, 18, 12, 0), date(2026, 10, 18)),
        (date(2026, 10, 18), date(2026, 10, 18)),
    ],
)
def test_parse_api_date_accepts_iso_values(value, expected):
    assert parse_api_date(value) == expected


@pytest.mark.parametrize("value", ["18/10/2026", "not a date", "2026-13-01", 20261018, ""])
def test_parse_api_date_rejects_malformed_values(value):
    with pytest.raises(ValidationError):
        parse_api_date(value)
