"""GET /v1/bnpl/limits - BNPL limit utilization"""

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from ledger_gateway.api.dependencies import get_erp_client, get_today
from ledger_gateway.api.v1.schemas import BnplLimitsResponse, LimitUtilizationSchema
from ledger_gateway.domain.limits import limit_utilization
from ledger_gateway.infrastructure.clients.erp import ErpClient

router = APIRouter()


@router.get("/bnpl/limits", response_model=BnplLimitsResponse)
async def get_bnpl_limits(
    type: Optional[Literal["purchase", "sales"]] = Query(None, description="purchase or sales"),
    erp_client: ErpClient = Depends(get_erp_client),
    today: date = Depends(get_today),
):
    """
    Utilization of every BNPL limit, optionally of one type.

    Over-limit usage is reported as-is (utilization above 100).
    """
    limits = await erp_client.get_bnpl_limits(type)
    return BnplLimitsResponse(
        as_of=today,
        limits=[LimitUtilizationSchema.from_domain(limit_utilization(limit, today)) for limit in limits],
    )
