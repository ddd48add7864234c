"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from ledger_gateway.api.main import create_app
from ledger_gateway.api.dependencies import get_today
from ledger_gateway.domain.models import BnplLimit, LedgerSnapshot, Party, Transaction


TODAY = date(2026, 10, 18)


def make_transaction(**overrides) -> Transaction:
    """Open sales invoice with sensible defaults"""
    fields = dict(
        id=1,
        transaction_number="INV-001",
        transaction_type="sales_invoice",
        party_id=1,
        amount=Decimal("1000"),
        balance_due=Decimal("1000"),
        transaction_date=TODAY - timedelta(days=30),
        due_date=TODAY,
        status="pending",
    )
    fields.update(overrides)
    return Transaction(**fields)


def make_party(**overrides) -> Party:
    fields = dict(id=1, name="Sharma Traders", type="customer", gstin="27AAPFS1234K1Z5", contact_person="Rohit Sharma")
    fields.update(overrides)
    return Party(**fields)


def make_limit(**overrides) -> BnplLimit:
    fields = dict(
        id=1,
        party_id=1,
        limit_type="purchase",
        total_limit=Decimal("250000"),
        used_limit=Decimal("150000"),
        expiry_date=TODAY + timedelta(days=90),
    )
    fields.update(overrides)
    return BnplLimit(**fields)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fixed reference date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def sample_parties() -> list[Party]:
    return [
        make_party(id=1, name="Sharma Traders"),
        make_party(id=2, name="Gupta Electronics", gstin="07AAGCG5678M1Z2", contact_person="Anita Gupta"),
        make_party(id=3, name="Patel Wholesale", type="both", gstin=None, contact_person=None),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """
    Three customers, five invoices.

    Open balances: 1000 due today, 2000 due 10 days ago, 1500 due 45 days
    ago, 3000 due 70 days ago. The 500 invoice is fully paid.
    """
    return [
        make_transaction(id=1, party_id=1, balance_due=Decimal("1000"), due_date=TODAY, status="pending"),
        make_transaction(id=2, party_id=1, balance_due=Decimal("2000"), amount=Decimal("2000"),
                         due_date=TODAY - timedelta(days=10), status="overdue"),
        make_transaction(id=3, party_id=2, balance_due=Decimal("1500"), amount=Decimal("1500"),
                         due_date=TODAY - timedelta(days=45), status="partially_paid"),
        make_transaction(id=4, party_id=3, balance_due=Decimal("3000"), amount=Decimal("3000"),
                         due_date=TODAY - timedelta(days=70), status="overdue"),
        make_transaction(id=5, party_id=3, balance_due=Decimal("0"), amount=Decimal("500"),
                         due_date=TODAY - timedelta(days=20), status="paid"),
        make_transaction(id=6, transaction_type="receipt", party_id=1, amount=Decimal("500"),
                         balance_due=None, due_date=None, status="completed",
                         transaction_date=TODAY - timedelta(days=3)),
    ]


@pytest.fixture
def sample_snapshot(sample_transactions, sample_parties) -> LedgerSnapshot:
    return LedgerSnapshot(
        transactions=sample_transactions,
        parties=sample_parties,
        bnpl_limits=[
            make_limit(id=1, limit_type="purchase"),
            make_limit(id=2, limit_type="sales", total_limit=Decimal("350000"), used_limit=Decimal("225000")),
        ],
    )
