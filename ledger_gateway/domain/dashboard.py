"""Dashboard assembly - join the fetched snapshot into one view"""

from datetime import date, MINYEAR
from typing import Iterable, List

from ledger_gateway.domain.ageing import PAYABLE_TYPE, RECEIVABLE_TYPE, ageing_for
from ledger_gateway.domain.limits import limit_utilization, limits_of_type
from ledger_gateway.domain.models import DashboardView, LedgerSnapshot, PendingSyncs, Transaction
from ledger_gateway.domain.rollup import open_balance_summary

EARLIEST = date(MINYEAR, 1, 1)


def recent_transactions(transactions: Iterable[Transaction], limit: int) -> List[Transaction]:
    """Newest first by transaction date; undated records sort last"""
    return sorted(transactions, key=lambda t: t.transaction_date or EARLIEST, reverse=True)[:limit]


def pending_syncs(transactions: Iterable[Transaction]) -> PendingSyncs:
    """Count documents not yet pushed to Tally"""
    pending = PendingSyncs()
    for txn in transactions:
        if txn.is_synced or txn.status in ("draft", "cancelled"):
            continue
        if txn.transaction_type in (RECEIVABLE_TYPE, PAYABLE_TYPE):
            pending.invoices += 1
        elif txn.transaction_type == "payment":
            pending.payments += 1
        elif txn.transaction_type == "receipt":
            pending.receipts += 1
    return pending


def build_dashboard(snapshot: LedgerSnapshot, today: date, recent_limit: int = 5) -> DashboardView:
    """
    Derive every dashboard panel from one snapshot.

    Panels:
    - open payables / receivables (status allow-list totals)
    - receivables / payables ageing (due-date buckets)
    - purchase / sales BNPL utilization
    - recent transactions, latest Tally sync, pending sync counts
    """
    transactions = snapshot.transactions

    return DashboardView(
        open_payables=open_balance_summary(transactions, PAYABLE_TYPE),
        open_receivables=open_balance_summary(transactions, RECEIVABLE_TYPE),
        receivables_ageing=ageing_for(transactions, RECEIVABLE_TYPE, today),
        payables_ageing=ageing_for(transactions, PAYABLE_TYPE, today),
        purchase_bnpl=[limit_utilization(l, today) for l in limits_of_type(snapshot.bnpl_limits, "purchase")],
        sales_bnpl=[limit_utilization(l, today) for l in limits_of_type(snapshot.bnpl_limits, "sales")],
        recent_transactions=recent_transactions(transactions, recent_limit),
        latest_sync=snapshot.latest_sync,
        pending_syncs=pending_syncs(transactions),
    )
