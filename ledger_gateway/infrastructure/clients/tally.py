"""Tally ERP sync trigger client"""

import httpx

from ledger_gateway.config import settings
from ledger_gateway.domain.exceptions import TallySyncError, ValidationError
from ledger_gateway.domain.models import TallySyncLog
from ledger_gateway.infrastructure.clients.payloads import TallySyncLogPayload, parse_one
from ledger_gateway.infrastructure.observability.logging import log_tally_sync
from ledger_gateway.infrastructure.observability.metrics import record_tally_sync

SYNC_TYPES = ("push", "pull")


class TallySyncClient:
    """Client for triggering a sync between the ERP and Tally"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.erp_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def trigger_sync(self, sync_type: str = "pull") -> TallySyncLog:
        """
        Ask the ERP to push to / pull from Tally.

        One attempt only: the outcome is reported back to the user, who can
        trigger again.

        Raises:
            ValidationError: Unknown sync type
            TallySyncError: Request failed or the sync reported failure
        """
        if sync_type not in SYNC_TYPES:
            raise ValidationError(f"Unknown sync type: {sync_type}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/api/tally-sync",
                    json={"syncType": sync_type},
                )
                response.raise_for_status()
                log = parse_one(TallySyncLogPayload, response.json()).to_domain()

            except httpx.TimeoutException as e:
                record_tally_sync(sync_type, succeeded=False)
                raise TallySyncError(f"Tally sync timed out after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                record_tally_sync(sync_type, succeeded=False)
                raise TallySyncError(f"Tally sync rejected: {e.response.status_code}") from e
            except httpx.RequestError as e:
                record_tally_sync(sync_type, succeeded=False)
                raise TallySyncError(f"Tally sync request failed: {e}") from e
            except (ValueError, ValidationError) as e:
                record_tally_sync(sync_type, succeeded=False)
                raise TallySyncError(f"Invalid Tally sync response: {e}") from e

        succeeded = log.sync_status == "success"
        record_tally_sync(sync_type, succeeded)
        log_tally_sync(sync_type, log.sync_status, log.transaction_count, log.details)

        if not succeeded:
            raise TallySyncError(log.details or "Tally sync failed")

        return log
