"""GET /v1/receivables/* and /v1/payables/* - ageing, party rollups, open documents"""

import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ledger_gateway.api.dependencies import get_erp_client, get_request_id, get_strict, get_today
from ledger_gateway.api.v1.schemas import (
    AgeingResponse,
    AgeingSchema,
    DocumentsResponse,
    PartyBalanceSchema,
    PartyBalancesResponse,
    TransactionSchema,
)
from ledger_gateway.domain.ageing import PAYABLE_TYPE, RECEIVABLE_TYPE, ageing_for
from ledger_gateway.domain.rollup import party_balances, search_parties, sort_party_balances
from ledger_gateway.domain.validation import check_transactions
from ledger_gateway.infrastructure.clients.erp import ErpClient
from ledger_gateway.infrastructure.observability.logging import log_view_computed
from ledger_gateway.infrastructure.observability.metrics import record_ageing
from ledger_gateway.utils.date_utils import days_overdue


def matches_status_filter(txn, status_filter: str, overdue_days: int) -> bool:
    """
    List-view status filter.

    - all:     everything
    - paid:    nothing left to pay
    - unpaid:  something left to pay
    - overdue: past due date with something left to pay
    - any other value: that exact status
    """
    if status_filter == "all":
        return True
    if status_filter == "paid":
        return txn.outstanding <= 0
    if status_filter == "unpaid":
        return txn.outstanding > 0
    if status_filter == "overdue":
        return txn.outstanding > 0 and overdue_days > 0
    return txn.status == status_filter


def build_ledger_router(ledger: str, document_type: str, parties_path: str, documents_path: str) -> APIRouter:
    """Routes for one side of the books (receivables or payables)"""
    router = APIRouter()

    @router.get(f"/{ledger}/ageing", response_model=AgeingResponse)
    async def get_ageing(
        request: Request,
        erp_client: ErpClient = Depends(get_erp_client),
        today: date = Depends(get_today),
        strict: bool = Depends(get_strict),
    ):
        """Outstanding balance of open documents split into ageing buckets"""
        start_time = time.time()
        transactions = check_transactions(await erp_client.get_transactions(document_type), strict)

        ageing = ageing_for(transactions, document_type, today)
        record_ageing(ledger, ageing)

        log_view_computed(get_request_id(request), f"{ledger}_ageing", len(transactions), (time.time() - start_time) * 1000)
        return AgeingResponse(ledger=ledger, as_of=today, ageing=AgeingSchema.from_domain(ageing))

    @router.get(f"/{ledger}/{parties_path}", response_model=PartyBalancesResponse)
    async def get_party_balances(
        request: Request,
        sort_by: str = Query("total_due", description="name, total_due, total_overdue, last_payment_date, oldest_due_date, average_collection_days"),
        order: str = Query("desc", description="asc or desc"),
        search: Optional[str] = Query(None, description="Match on name, contact person or GSTIN"),
        erp_client: ErpClient = Depends(get_erp_client),
        today: date = Depends(get_today),
        strict: bool = Depends(get_strict),
    ):
        """Per-party outstanding totals, sorted and filtered"""
        start_time = time.time()
        snapshot = await erp_client.fetch_snapshot(include_limits=False)
        transactions = check_transactions(snapshot.transactions, strict)

        rows = party_balances(snapshot.parties, transactions, document_type, today)
        rows = sort_party_balances(search_parties(rows, search), sort_by, order)

        log_view_computed(get_request_id(request), f"{ledger}_{parties_path}", len(transactions), (time.time() - start_time) * 1000)
        return PartyBalancesResponse(
            ledger=ledger,
            as_of=today,
            sort_by=sort_by,
            order=order,
            parties=[PartyBalanceSchema.from_domain(row) for row in rows],
        )

    @router.get(f"/{ledger}/{documents_path}", response_model=DocumentsResponse)
    async def get_documents(
        request: Request,
        status: str = Query("all", description="all, paid, unpaid, overdue, or a transaction status"),
        erp_client: ErpClient = Depends(get_erp_client),
        today: date = Depends(get_today),
        strict: bool = Depends(get_strict),
    ):
        """Invoices or bills with their days-overdue badge"""
        start_time = time.time()
        snapshot = await erp_client.fetch_snapshot(include_limits=False)
        transactions = check_transactions(snapshot.transactions, strict)
        names = {party.id: party.name for party in snapshot.parties}

        documents = []
        for txn in transactions:
            if txn.transaction_type != document_type:
                continue
            overdue_days = days_overdue(txn.due_date, today)
            if matches_status_filter(txn, status, overdue_days):
                documents.append(TransactionSchema.from_domain(txn, overdue_days, names.get(txn.party_id)))

        log_view_computed(get_request_id(request), f"{ledger}_{documents_path}", len(documents), (time.time() - start_time) * 1000)
        return DocumentsResponse(ledger=ledger, as_of=today, status_filter=status, documents=documents)

    return router


receivables_router = build_ledger_router("receivables", RECEIVABLE_TYPE, "customers", "invoices")
payables_router = build_ledger_router("payables", PAYABLE_TYPE, "vendors", "bills")
