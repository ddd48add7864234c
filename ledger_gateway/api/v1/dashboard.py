"""GET /v1/dashboard - dashboard panels in one response"""

import time
from dataclasses import replace
from datetime import date

from fastapi import APIRouter, Depends, Request

from ledger_gateway.api.dependencies import get_erp_client, get_request_id, get_strict, get_today
from ledger_gateway.api.v1.schemas import (
    AgeingSchema,
    DashboardResponse,
    LimitUtilizationSchema,
    OpenBalanceSchema,
    PendingSyncsSchema,
    SyncLogSchema,
    TransactionSchema,
)
from ledger_gateway.config import settings
from ledger_gateway.domain.dashboard import build_dashboard
from ledger_gateway.domain.validation import check_transactions
from ledger_gateway.infrastructure.clients.erp import ErpClient
from ledger_gateway.infrastructure.observability.logging import log_view_computed
from ledger_gateway.infrastructure.observability.metrics import record_ageing
from ledger_gateway.utils.date_utils import days_overdue

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    erp_client: ErpClient = Depends(get_erp_client),
    today: date = Depends(get_today),
    strict: bool = Depends(get_strict),
):
    """
    Assemble the dashboard from one snapshot.

    Flow:
    1. Fetch transactions, parties, BNPL limits and the latest sync log concurrently
    2. Check transaction data quality (strict mode rejects bad records)
    3. Derive open balances, ageing, BNPL utilization and sync counts
    4. Publish ageing gauges and return formatted panels
    """
    start_time = time.time()

    snapshot = await erp_client.fetch_snapshot(include_sync=True)
    transactions = check_transactions(snapshot.transactions, strict)
    snapshot = replace(snapshot, transactions=transactions)

    view = build_dashboard(snapshot, today, settings.recent_transactions_limit)
    record_ageing("receivables", view.receivables_ageing)
    record_ageing("payables", view.payables_ageing)

    names = {party.id: party.name for party in snapshot.parties}

    duration_ms = (time.time() - start_time) * 1000
    log_view_computed(get_request_id(request), "dashboard", len(transactions), duration_ms)

    return DashboardResponse(
        as_of=today,
        open_payables=OpenBalanceSchema.from_domain(view.open_payables),
        open_receivables=OpenBalanceSchema.from_domain(view.open_receivables),
        receivables_ageing=AgeingSchema.from_domain(view.receivables_ageing),
        payables_ageing=AgeingSchema.from_domain(view.payables_ageing),
        purchase_bnpl_limits=[LimitUtilizationSchema.from_domain(u) for u in view.purchase_bnpl],
        sales_bnpl_limits=[LimitUtilizationSchema.from_domain(u) for u in view.sales_bnpl],
        recent_transactions=[
            TransactionSchema.from_domain(t, days_overdue(t.due_date, today), names.get(t.party_id))
            for t in view.recent_transactions
        ],
        recent_sync_log=SyncLogSchema.from_domain(view.latest_sync) if view.latest_sync else None,
        pending_syncs=PendingSyncsSchema.from_domain(view.pending_syncs),
    )
