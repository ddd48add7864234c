"""Party-wise receivables/payables rollup"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List

from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.domain.models import OpenBalance, Party, PartyBalance, PartyRollup, Transaction, ZERO
from ledger_gateway.utils.date_utils import days_between

# Explicit allow-list: what counts as "still owed". using_bnpl and sent are not in it.
# Status alone decides; a missing or zero balance adds 0 but the document still counts.
OPEN_STATUSES = ("pending", "overdue", "partially_paid")

# Payment documents settling each kind of open document
SETTLEMENT_TYPES = {
    "sales_invoice": "receipt",
    "purchase_bill": "payment",
}

SORT_ORDERS = ("asc", "desc")


def is_open(transaction: Transaction) -> bool:
    return transaction.status in OPEN_STATUSES


def open_documents(transactions: Iterable[Transaction], transaction_type: str) -> List[Transaction]:
    """Open transactions of one type (sales invoices or purchase bills)"""
    return [t for t in transactions if t.transaction_type == transaction_type and is_open(t)]


def rollup_by_party(transactions: Iterable[Transaction]) -> Dict[int, PartyRollup]:
    """
    Group open transactions by party and total their balances.

    Only statuses in OPEN_STATUSES contribute. Transactions without a party
    cannot be attributed and are dropped. `overdue` is the part of `total`
    coming from transactions whose status is "overdue"; it does not look at
    due dates (the ageing buckets do).
    """
    rollups: Dict[int, PartyRollup] = {}

    for txn in transactions:
        if txn.party_id is None or not is_open(txn):
            continue

        rollup = rollups.setdefault(txn.party_id, PartyRollup())
        rollup.total += txn.outstanding
        rollup.count += 1

        if txn.status == "overdue":
            rollup.overdue += txn.outstanding

    return rollups


def open_balance_summary(transactions: Iterable[Transaction], transaction_type: str) -> OpenBalance:
    """Dashboard figure: total and count of open documents of one type"""
    documents = open_documents(transactions, transaction_type)
    return OpenBalance(
        total=sum((t.outstanding for t in documents), ZERO),
        count=len(documents),
    )


def _average_age_days(documents: List[Transaction], today: date) -> int | None:
    ages = [days_between(t.transaction_date, today) for t in documents if t.transaction_date is not None]
    if not ages:
        return None
    return int((Decimal(sum(ages)) / len(ages)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def party_balances(
    parties: Iterable[Party],
    transactions: Iterable[Transaction],
    document_type: str,
    today: date,
) -> List[PartyBalance]:
    """
    Build one row per party that has an open balance on `document_type`.

    Rows keep the order of `parties`. Transactions pointing at a party that
    is not in `parties` are ignored, since there is no name to show.

    - last_payment_date: latest receipt (customers) / payment (vendors)
    - oldest_due_date: earliest due date among the open documents
    - average_collection_days: mean age of the open documents, in days
    """
    transactions = list(transactions)
    documents = open_documents(transactions, document_type)
    rollups = rollup_by_party(documents)
    settlement_type = SETTLEMENT_TYPES.get(document_type)

    rows = []
    for party in parties:
        rollup = rollups.get(party.id)
        if rollup is None:
            continue

        party_docs = [t for t in documents if t.party_id == party.id]
        due_dates = [t.due_date for t in party_docs if t.due_date is not None]
        payment_dates = [
            t.transaction_date
            for t in transactions
            if t.party_id == party.id
            and t.transaction_type == settlement_type
            and t.transaction_date is not None
            and t.status not in ("draft", "cancelled")
        ]

        rows.append(
            PartyBalance(
                party=party,
                total_due=rollup.total,
                total_overdue=rollup.overdue,
                invoice_count=rollup.count,
                last_payment_date=max(payment_dates) if payment_dates else None,
                oldest_due_date=min(due_dates) if due_dates else None,
                average_collection_days=_average_age_days(party_docs, today),
            )
        )

    return rows


SORT_KEYS: Dict[str, Callable[[PartyBalance], object]] = {
    "name": lambda row: row.party.name.casefold(),
    "total_due": lambda row: row.total_due,
    "total_payable": lambda row: row.total_due,
    "total_overdue": lambda row: row.total_overdue,
    "last_payment_date": lambda row: row.last_payment_date,
    "oldest_due_date": lambda row: row.oldest_due_date,
    "average_collection_days": lambda row: row.average_collection_days,
}


def sort_party_balances(rows: Iterable[PartyBalance], sort_by: str = "total_due", order: str = "desc") -> List[PartyBalance]:
    """
    Sort rollup rows by one column.

    Equal values keep their input order in both directions. Rows with no
    value for the column (no payment yet, no due date) go last, in input
    order, whichever direction is requested.

    Raises:
        ValidationError: Unknown sort key or order
    """
    if sort_by not in SORT_KEYS:
        raise ValidationError(f"Unknown sort key: {sort_by}")
    if order not in SORT_ORDERS:
        raise ValidationError(f"Unknown sort order: {order}")

    key = SORT_KEYS[sort_by]
    rows = list(rows)
    present = [row for row in rows if key(row) is not None]
    missing = [row for row in rows if key(row) is None]

    return sorted(present, key=key, reverse=(order == "desc")) + missing


def search_parties(rows: Iterable[PartyBalance], term: str | None) -> List[PartyBalance]:
    """Case-insensitive match on name, contact person or GSTIN"""
    rows = list(rows)
    if not term:
        return rows

    needle = term.casefold()
    return [
        row
        for row in rows
        if needle in row.party.name.casefold()
        or needle in (row.party.contact_person or "").casefold()
        or needle in (row.party.gstin or "").casefold()
    ]
