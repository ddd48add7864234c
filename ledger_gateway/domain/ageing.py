"""Ageing analysis - split outstanding balances into day-range buckets"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Tuple

from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.domain.models import AgeingBuckets, Transaction, ZERO
from ledger_gateway.domain.rollup import open_documents
from ledger_gateway.utils.date_utils import days_overdue

BUCKETS = ("current", "days1to30", "days31to60", "days60plus")

RECEIVABLE_TYPE = "sales_invoice"
PAYABLE_TYPE = "purchase_bill"


def bucket_for(days: int) -> str:
    """
    Map days overdue to an ageing bucket.

    - current:    not yet due (d <= 0)
    - days1to30:  1 - 30
    - days31to60: 31 - 60
    - days60plus: more than 60
    """
    if days <= 0:
        return "current"
    elif days <= 30:
        return "days1to30"
    elif days <= 60:
        return "days31to60"
    else:
        return "days60plus"


def calculate_ageing(entries: Iterable[Tuple[Decimal, date | None]], today: date) -> AgeingBuckets:
    """
    Bucket (outstanding, due_date) pairs relative to today.

    Zero balances are skipped. Entries without a due date are current.
    Bucket sums are Decimal, so buckets always add up to the total exactly.

    Raises:
        ValidationError: On a negative balance or a due date that is not a date
    """
    result = AgeingBuckets()

    for outstanding, due_date in entries:
        if outstanding is None or outstanding == ZERO:
            continue
        if outstanding < ZERO:
            raise ValidationError(f"Negative outstanding balance: {outstanding}")
        if due_date is not None and not isinstance(due_date, date):
            raise ValidationError(f"Malformed due date: {due_date!r}")

        bucket = bucket_for(days_overdue(due_date, today))
        setattr(result, bucket, getattr(result, bucket) + outstanding)
        result.count += 1

    return result


def ageing_for(transactions: Iterable[Transaction], transaction_type: str, today: date) -> AgeingBuckets:
    """Receivables (sales_invoice) or payables (purchase_bill) ageing"""
    return calculate_ageing(
        ((t.outstanding, t.due_date) for t in open_documents(transactions, transaction_type)),
        today,
    )
