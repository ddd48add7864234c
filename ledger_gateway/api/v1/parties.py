"""GET /v1/parties/{party_id}/summary - one party's balances and limits"""

from datetime import date

from fastapi import APIRouter, Depends

from ledger_gateway.api.dependencies import get_erp_client, get_strict, get_today
from ledger_gateway.api.v1.schemas import (
    AgeingSchema,
    LimitUtilizationSchema,
    PartyRollupSchema,
    PartySchema,
    PartySummaryResponse,
)
from ledger_gateway.domain.ageing import PAYABLE_TYPE, RECEIVABLE_TYPE, ageing_for
from ledger_gateway.domain.limits import limit_utilization
from ledger_gateway.domain.models import PartyRollup
from ledger_gateway.domain.rollup import open_documents, rollup_by_party
from ledger_gateway.domain.validation import check_transactions
from ledger_gateway.infrastructure.clients.erp import ErpClient
from ledger_gateway.utils.async_utils import gather_or_cancel

router = APIRouter()


@router.get("/parties/{party_id}/summary", response_model=PartySummaryResponse)
async def get_party_summary(
    party_id: int,
    erp_client: ErpClient = Depends(get_erp_client),
    today: date = Depends(get_today),
    strict: bool = Depends(get_strict),
):
    """
    Receivable and payable position of a single party.

    Returns 404 when the party does not exist.
    """
    party, transactions, limits = await gather_or_cancel(
        erp_client.get_party(party_id),
        erp_client.get_transactions(party_id=party_id),
        erp_client.get_bnpl_limits(),
    )
    transactions = [t for t in check_transactions(transactions, strict) if t.party_id == party_id]

    receivables = rollup_by_party(open_documents(transactions, RECEIVABLE_TYPE)).get(party_id, PartyRollup())
    payables = rollup_by_party(open_documents(transactions, PAYABLE_TYPE)).get(party_id, PartyRollup())

    return PartySummaryResponse(
        as_of=today,
        party=PartySchema.from_domain(party),
        receivables=PartyRollupSchema.from_domain(receivables),
        payables=PartyRollupSchema.from_domain(payables),
        receivables_ageing=AgeingSchema.from_domain(ageing_for(transactions, RECEIVABLE_TYPE, today)),
        payables_ageing=AgeingSchema.from_domain(ageing_for(transactions, PAYABLE_TYPE, today)),
        bnpl_limits=[
            LimitUtilizationSchema.from_domain(limit_utilization(limit, today))
            for limit in limits
            if limit.party_id == party_id
        ],
    )
