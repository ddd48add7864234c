"""POST /v1/tally-sync - trigger a Tally ERP sync"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ledger_gateway.api.dependencies import get_request_id, get_tally_client
from ledger_gateway.api.v1.schemas import SyncLogSchema, TallySyncRequest, TallySyncResponse
from ledger_gateway.domain.exceptions import TallySyncError
from ledger_gateway.infrastructure.clients.tally import TallySyncClient

router = APIRouter()


@router.post("/tally-sync", response_model=TallySyncResponse, status_code=201)
async def trigger_tally_sync(
    request_body: TallySyncRequest,
    request: Request,
    tally_client: TallySyncClient = Depends(get_tally_client),
):
    """
    Forward a push/pull request to the ERP's Tally sync.

    Single attempt; a failure comes back as a 502 with a message meant for
    the user's notification.
    """
    request_id = get_request_id(request)

    try:
        log = await tally_client.trigger_sync(request_body.sync_type)
    except TallySyncError as e:
        logging.error(f"Tally sync error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Failed to sync with Tally ERP")

    return TallySyncResponse(message="Successfully synced with Tally ERP", log=SyncLogSchema.from_domain(log))
