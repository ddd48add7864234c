"""Integration tests for API endpoints"""

from decimal import Decimal
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from conftest import make_limit, make_party, make_transaction
from ledger_gateway.domain.exceptions import NetworkError, NotFoundError, TallySyncError
from ledger_gateway.domain.models import LedgerSnapshot, TallySyncLog

ERP = "ledger_gateway.infrastructure.clients.erp.ErpClient"
TALLY = "ledger_gateway.infrastructure.clients.tally.TallySyncClient"


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "ledger_tally_sync_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@patch(f"{ERP}.fetch_snapshot")
def test_dashboard_endpoint(mock_fetch: AsyncMock, client: TestClient, sample_snapshot: LedgerSnapshot):
    """Test GET /v1/dashboard"""
    mock_fetch.return_value = sample_snapshot

    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2026-10-18"
    assert Decimal(data["open_receivables"]["total"]) == Decimal("7500")
    assert data["open_receivables"]["count"] == 4
    assert data["open_receivables"]["total_display"] == "₹7,500"
    assert Decimal(data["receivables_ageing"]["days60plus"]) == Decimal("3000")
    assert data["purchase_bnpl_limits"][0]["utilization_percent"] == 60
    assert data["sales_bnpl_limits"][0]["utilization_percent"] == 64
    assert [t["id"] for t in data["recent_transactions"]] == [6, 1, 2, 3, 4]
    assert data["recent_sync_log"] is None
    assert data["pending_syncs"] == {"invoices": 5, "payments": 0, "receipts": 1}
    mock_fetch.assert_awaited_once_with(include_sync=True)


@patch(f"{ERP}.fetch_snapshot")
def test_dashboard_marks_past_due_rows_overdue(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    mock_fetch.return_value = sample_snapshot

    rows = {t["id"]: t for t in client.get("/v1/dashboard").json()["recent_transactions"]}

    assert rows[3]["status"] == "partially_paid"
    assert rows[3]["display_status"] == "overdue"
    assert rows[3]["days_overdue"] == 45
    assert rows[3]["status_color"] == "red"
    assert rows[1]["display_status"] == "pending"
    assert rows[1]["days_overdue"] == 0


@patch(f"{ERP}.fetch_snapshot")
def test_erp_outage_returns_503(mock_fetch: AsyncMock, client: TestClient):
    mock_fetch.side_effect = NetworkError("ERP API timeout after 5.0s fetching transactions")

    response = client.get("/v1/dashboard")

    assert response.status_code == 503
    assert response.json()["detail"] == "ERP service unavailable"


@patch(f"{ERP}.get_transactions")
def test_receivables_ageing_endpoint(mock_get: AsyncMock, client: TestClient, sample_transactions):
    """Test GET /v1/receivables/ageing"""
    mock_get.return_value = sample_transactions

    response = client.get("/v1/receivables/ageing")

    assert response.status_code == 200
    ageing = response.json()["ageing"]
    assert Decimal(ageing["current"]) == Decimal("1000")
    assert Decimal(ageing["days1to30"]) == Decimal("2000")
    assert Decimal(ageing["days31to60"]) == Decimal("1500")
    assert Decimal(ageing["days60plus"]) == Decimal("3000")
    assert Decimal(ageing["total"]) == Decimal("7500")
    assert ageing["display"]["total"] == "₹7,500"
    mock_get.assert_awaited_once_with("sales_invoice")


@patch(f"{ERP}.get_transactions")
def test_strict_mode_rejects_inconsistent_records(mock_get: AsyncMock, client: TestClient):
    mock_get.return_value = [make_transaction(amount=Decimal("100"), balance_due=Decimal("150"))]

    assert client.get("/v1/receivables/ageing").status_code == 200

    response = client.get("/v1/receivables/ageing?strict=true")
    assert response.status_code == 422
    assert "exceeds amount" in response.json()["detail"]


@patch(f"{ERP}.fetch_snapshot")
def test_customers_endpoint_sorted_by_total_due(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    """Test GET /v1/receivables/customers"""
    mock_fetch.return_value = sample_snapshot

    response = client.get("/v1/receivables/customers")

    assert response.status_code == 200
    data = response.json()
    assert data["sort_by"] == "total_due"
    assert [(p["party_id"], Decimal(p["total_due"])) for p in data["parties"]] == [
        (1, Decimal("3000")),
        (3, Decimal("3000")),
        (2, Decimal("1500")),
    ]
    assert data["parties"][0]["last_payment_display"] == "15 Oct 2026"


@patch(f"{ERP}.fetch_snapshot")
def test_customers_endpoint_search_and_ascending(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    mock_fetch.return_value = sample_snapshot

    by_name = client.get("/v1/receivables/customers?sort_by=name&order=asc").json()["parties"]
    found = client.get("/v1/receivables/customers?search=gupta").json()["parties"]

    assert [p["name"] for p in by_name] == ["Gupta Electronics", "Patel Wholesale", "Sharma Traders"]
    assert [p["party_id"] for p in found] == [2]


@patch(f"{ERP}.fetch_snapshot")
def test_customers_endpoint_rejects_unknown_sort(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    mock_fetch.return_value = sample_snapshot

    response = client.get("/v1/receivables/customers?sort_by=balance")

    assert response.status_code == 422
    assert "Unknown sort key" in response.json()["detail"]


@patch(f"{ERP}.fetch_snapshot")
def test_invoices_status_filter(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    """Test GET /v1/receivables/invoices?status=..."""
    mock_fetch.return_value = sample_snapshot

    def ids(status):
        response = client.get(f"/v1/receivables/invoices?status={status}")
        assert response.status_code == 200
        return [d["id"] for d in response.json()["documents"]]

    assert ids("all") == [1, 2, 3, 4, 5]
    assert ids("overdue") == [2, 3, 4]
    assert ids("unpaid") == [1, 2, 3, 4]
    assert ids("paid") == [5]
    assert ids("partially_paid") == [3]


@patch(f"{ERP}.fetch_snapshot")
def test_payables_endpoints_use_purchase_bills(mock_fetch: AsyncMock, client: TestClient, sample_snapshot):
    vendor = make_party(id=9, name="Mehta Supplies", type="vendor")
    bill = make_transaction(id=20, transaction_type="purchase_bill", party_id=9, transaction_number="BILL-001")
    mock_fetch.return_value = LedgerSnapshot(
        transactions=sample_snapshot.transactions + [bill],
        parties=sample_snapshot.parties + [vendor],
        bnpl_limits=[],
    )

    vendors = client.get("/v1/payables/vendors").json()["parties"]
    bills = client.get("/v1/payables/bills").json()["documents"]

    assert [v["party_id"] for v in vendors] == [9]
    assert [b["id"] for b in bills] == [20]
    assert bills[0]["party_name"] == "Mehta Supplies"


@patch(f"{ERP}.get_bnpl_limits")
@patch(f"{ERP}.get_transactions")
@patch(f"{ERP}.get_party")
def test_party_summary_endpoint(
    mock_party: AsyncMock,
    mock_transactions: AsyncMock,
    mock_limits: AsyncMock,
    client: TestClient,
    sample_transactions,
):
    """Test GET /v1/parties/{party_id}/summary"""
    mock_party.return_value = make_party(id=1)
    mock_transactions.return_value = [t for t in sample_transactions if t.party_id == 1]
    mock_limits.return_value = [make_limit(id=1, party_id=1), make_limit(id=2, party_id=2)]

    response = client.get("/v1/parties/1/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["party"]["name"] == "Sharma Traders"
    assert Decimal(data["receivables"]["total"]) == Decimal("3000")
    assert Decimal(data["receivables"]["overdue"]) == Decimal("2000")
    assert data["payables"]["count"] == 0
    assert [l["limit_id"] for l in data["bnpl_limits"]] == [1]


@patch(f"{ERP}.get_bnpl_limits")
@patch(f"{ERP}.get_transactions")
@patch(f"{ERP}.get_party")
def test_party_summary_not_found(
    mock_party: AsyncMock,
    mock_transactions: AsyncMock,
    mock_limits: AsyncMock,
    client: TestClient,
):
    mock_party.side_effect = NotFoundError("parties not found: /api/parties/999")
    mock_transactions.return_value = []
    mock_limits.return_value = []

    response = client.get("/v1/parties/999/summary")

    assert response.status_code == 404


@patch(f"{ERP}.get_bnpl_limits")
def test_bnpl_limits_endpoint(mock_limits: AsyncMock, client: TestClient):
    """Test GET /v1/bnpl/limits"""
    mock_limits.return_value = [make_limit(used_limit=Decimal("275000"))]

    response = client.get("/v1/bnpl/limits?type=purchase")

    assert response.status_code == 200
    limit = response.json()["limits"][0]
    assert limit["utilization_percent"] == 110
    assert limit["over_limit"] is True
    assert limit["days_to_expiry"] == 90
    assert limit["used_display"] == "₹2,75,000"
    mock_limits.assert_awaited_once_with("purchase")


def test_bnpl_limits_rejects_unknown_type(client: TestClient):
    assert client.get("/v1/bnpl/limits?type=lease").status_code == 422


@patch(f"{TALLY}.trigger_sync")
def test_tally_sync_success(mock_sync: AsyncMock, client: TestClient):
    """Test POST /v1/tally-sync"""
    mock_sync.return_value = TallySyncLog(
        id=7, sync_type="push", sync_status="success", transaction_count=12, details=None, synced_at=None
    )

    response = client.post("/v1/tally-sync", json={"sync_type": "push"})

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Successfully synced with Tally ERP"
    assert data["log"]["transaction_count"] == 12
    mock_sync.assert_awaited_once_with("push")


@patch(f"{TALLY}.trigger_sync")
def test_tally_sync_failure_returns_502(mock_sync: AsyncMock, client: TestClient):
    mock_sync.side_effect = TallySyncError("Tally sync timed out after 5.0s")

    response = client.post("/v1/tally-sync", json={})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to sync with Tally ERP"
    mock_sync.assert_awaited_once_with("pull")
