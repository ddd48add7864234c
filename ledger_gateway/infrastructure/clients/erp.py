"""ERP API HTTP client for fetching transactions, parties and BNPL limits"""

from typing import Any, Dict, List, Optional

import httpx

from ledger_gateway.config import settings
from ledger_gateway.domain.exceptions import NetworkError, NotFoundError, ValidationError
from ledger_gateway.domain.models import BnplLimit, LedgerSnapshot, Party, TallySyncLog, Transaction
from ledger_gateway.infrastructure.clients.payloads import (
    BnplLimitPayload,
    PartyPayload,
    TallySyncLogPayload,
    TransactionPayload,
    parse_many,
    parse_one,
)
from ledger_gateway.infrastructure.observability.metrics import erp_fetch_failures_counter, erp_fetch_latency_histogram
from ledger_gateway.utils.async_utils import gather_or_cancel


class ErpClient:
    """Client for the accounting/ERP REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.erp_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get_json(self, path: str, resource: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a JSON document from the ERP API.

        Raises:
            NetworkError: On timeout, connection failure, or non-404 HTTP errors
            NotFoundError: On 404
            ValidationError: Body is not JSON
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with erp_fetch_latency_histogram.labels(resource=resource).time():
                    response = await client.get(f"{self.base_url}{path}", params=query)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                erp_fetch_failures_counter.labels(resource=resource).inc()
                raise NetworkError(f"ERP API timeout after {self.timeout}s fetching {resource}") from e
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    raise NotFoundError(f"{resource} not found: {path}") from e
                erp_fetch_failures_counter.labels(resource=resource).inc()
                raise NetworkError(f"ERP API error {e.response.status_code} fetching {resource}") from e
            except httpx.RequestError as e:
                erp_fetch_failures_counter.labels(resource=resource).inc()
                raise NetworkError(f"ERP API unreachable fetching {resource}: {e}") from e
            except ValueError as e:
                erp_fetch_failures_counter.labels(resource=resource).inc()
                raise ValidationError(f"Invalid JSON from ERP API for {resource}") from e

    async def get_transactions(
        self,
        transaction_type: str | None = None,
        party_id: int | None = None,
    ) -> List[Transaction]:
        """GET /api/transactions[?type=&partyId=]"""
        data = await self._get_json(
            "/api/transactions",
            "transactions",
            params={"type": transaction_type, "partyId": party_id},
        )
        return [payload.to_domain() for payload in parse_many(TransactionPayload, data)]

    async def get_parties(self, party_type: str | None = None) -> List[Party]:
        """GET /api/parties[?type=customer|vendor]"""
        data = await self._get_json("/api/parties", "parties", params={"type": party_type})
        return [payload.to_domain() for payload in parse_many(PartyPayload, data)]

    async def get_party(self, party_id: int) -> Party:
        """
        GET /api/parties/{id}

        Raises:
            NotFoundError: Party does not exist
        """
        data = await self._get_json(f"/api/parties/{party_id}", "parties")
        return parse_one(PartyPayload, data).to_domain()

    async def get_bnpl_limits(self, limit_type: str | None = None) -> List[BnplLimit]:
        """GET /api/bnpl-limits[?type=purchase|sales]"""
        data = await self._get_json("/api/bnpl-limits", "bnpl_limits", params={"type": limit_type})
        return [payload.to_domain() for payload in parse_many(BnplLimitPayload, data)]

    async def get_latest_sync_log(self) -> TallySyncLog | None:
        """GET /api/tally-sync/latest; None when nothing has been synced yet"""
        try:
            data = await self._get_json("/api/tally-sync/latest", "tally_sync_log")
        except NotFoundError:
            return None
        return parse_one(TallySyncLogPayload, data).to_domain()

    async def fetch_snapshot(
        self,
        party_type: str | None = None,
        include_limits: bool = True,
        include_sync: bool = False,
    ) -> LedgerSnapshot:
        """
        Fetch everything one view needs, concurrently.

        The fetches are independent; the snapshot is built only once all of
        them have completed. The first failure cancels the fetches still in
        flight and is raised.
        """
        async def skip() -> None:
            return None

        transactions, parties, limits, latest_sync = await gather_or_cancel(
            self.get_transactions(),
            self.get_parties(party_type),
            self.get_bnpl_limits() if include_limits else skip(),
            self.get_latest_sync_log() if include_sync else skip(),
        )

        return LedgerSnapshot(
            transactions=transactions,
            parties=parties,
            bnpl_limits=limits or [],
            latest_sync=latest_sync,
        )
