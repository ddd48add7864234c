"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from ledger_gateway.domain.formatting import (
    format_currency,
    format_date,
    party_type_label,
    status_color,
    status_label,
    transaction_type_label,
)
from ledger_gateway.domain.models import (
    AgeingBuckets,
    LimitUtilization,
    OpenBalance,
    Party,
    PartyBalance,
    PartyRollup,
    PendingSyncs,
    TallySyncLog,
    Transaction,
)


class AgeingSchema(BaseModel):
    """Outstanding balance per ageing bucket"""

    current: Decimal
    days1to30: Decimal
    days31to60: Decimal
    days60plus: Decimal
    total: Decimal
    count: int
    display: Dict[str, str]

    @classmethod
    def from_domain(cls, buckets: AgeingBuckets) -> "AgeingSchema":
        amounts = buckets.as_dict()
        return cls(
            **amounts,
            total=buckets.total,
            count=buckets.count,
            display={name: format_currency(amount) for name, amount in {**amounts, "total": buckets.total}.items()},
        )


class AgeingResponse(BaseModel):
    """Response for GET /v1/{receivables|payables}/ageing"""

    ledger: str
    as_of: date
    ageing: AgeingSchema


class OpenBalanceSchema(BaseModel):
    total: Decimal
    count: int
    total_display: str

    @classmethod
    def from_domain(cls, balance: OpenBalance) -> "OpenBalanceSchema":
        return cls(total=balance.total, count=balance.count, total_display=format_currency(balance.total))


class LimitUtilizationSchema(BaseModel):
    """BNPL limit with utilization and expiry"""

    limit_id: int
    party_id: int
    limit_type: str
    total_limit: Decimal
    used_limit: Decimal
    available: Decimal
    utilization_percent: int
    over_limit: bool
    expiry_date: Optional[date] = None
    days_to_expiry: Optional[int] = None
    expired: bool
    total_display: str
    used_display: str
    expiry_display: Optional[str] = None
    expiry_short_display: Optional[str] = None

    @classmethod
    def from_domain(cls, usage: LimitUtilization) -> "LimitUtilizationSchema":
        limit = usage.limit
        return cls(
            limit_id=limit.id,
            party_id=limit.party_id,
            limit_type=limit.limit_type,
            total_limit=limit.total_limit,
            used_limit=limit.used_limit,
            available=usage.available,
            utilization_percent=usage.utilization_percent,
            over_limit=usage.over_limit,
            expiry_date=limit.expiry_date,
            days_to_expiry=usage.days_to_expiry,
            expired=usage.expired,
            total_display=format_currency(limit.total_limit),
            used_display=format_currency(limit.used_limit),
            expiry_display=usage.expiry_display,
            expiry_short_display=usage.expiry_short_display,
        )


class BnplLimitsResponse(BaseModel):
    """Response for GET /v1/bnpl/limits"""

    as_of: date
    limits: List[LimitUtilizationSchema]


class TransactionSchema(BaseModel):
    """Transaction row with its overdue badge"""

    id: int
    transaction_number: str
    transaction_type: str
    type_label: str
    party_id: Optional[int] = None
    party_name: Optional[str] = None
    amount: Decimal
    balance_due: Optional[Decimal] = None
    transaction_date: Optional[date] = None
    due_date: Optional[date] = None
    status: str
    display_status: str
    status_label: str
    status_color: str
    days_overdue: int
    is_bnpl: bool
    amount_display: str
    balance_due_display: str
    due_date_display: str

    @classmethod
    def from_domain(
        cls,
        txn: Transaction,
        days_overdue: int,
        party_name: Optional[str] = None,
    ) -> "TransactionSchema":
        # Badge shows "overdue" for anything past due with money still owed
        display_status = "overdue" if txn.outstanding > 0 and days_overdue > 0 else txn.status
        return cls(
            id=txn.id,
            transaction_number=txn.transaction_number,
            transaction_type=txn.transaction_type,
            type_label=transaction_type_label(txn.transaction_type),
            party_id=txn.party_id,
            party_name=party_name,
            amount=txn.amount,
            balance_due=txn.balance_due,
            transaction_date=txn.transaction_date,
            due_date=txn.due_date,
            status=txn.status,
            display_status=display_status,
            status_label=status_label(display_status),
            status_color=status_color(display_status),
            days_overdue=days_overdue,
            is_bnpl=txn.is_bnpl,
            amount_display=format_currency(txn.amount),
            balance_due_display=format_currency(txn.outstanding),
            due_date_display=format_date(txn.due_date),
        )


class DocumentsResponse(BaseModel):
    """Response for GET /v1/receivables/invoices and /v1/payables/bills"""

    ledger: str
    as_of: date
    status_filter: str
    documents: List[TransactionSchema]


class PartyBalanceSchema(BaseModel):
    """One customer/vendor row in the rollup views"""

    party_id: int
    name: str
    type: str
    type_label: str
    gstin: Optional[str] = None
    contact_person: Optional[str] = None
    total_due: Decimal
    total_overdue: Decimal
    invoice_count: int
    last_payment_date: Optional[date] = None
    oldest_due_date: Optional[date] = None
    average_collection_days: Optional[int] = None
    total_due_display: str
    total_overdue_display: str
    last_payment_display: str
    oldest_due_display: str

    @classmethod
    def from_domain(cls, row: PartyBalance) -> "PartyBalanceSchema":
        party = row.party
        return cls(
            party_id=party.id,
            name=party.name,
            type=party.type,
            type_label=party_type_label(party.type),
            gstin=party.gstin,
            contact_person=party.contact_person,
            total_due=row.total_due,
            total_overdue=row.total_overdue,
            invoice_count=row.invoice_count,
            last_payment_date=row.last_payment_date,
            oldest_due_date=row.oldest_due_date,
            average_collection_days=row.average_collection_days,
            total_due_display=format_currency(row.total_due),
            total_overdue_display=format_currency(row.total_overdue),
            last_payment_display=format_date(row.last_payment_date),
            oldest_due_display=format_date(row.oldest_due_date),
        )


class PartyBalancesResponse(BaseModel):
    """Response for GET /v1/receivables/customers and /v1/payables/vendors"""

    ledger: str
    as_of: date
    sort_by: str
    order: str
    parties: List[PartyBalanceSchema]


class PartyRollupSchema(BaseModel):
    total: Decimal
    overdue: Decimal
    count: int
    total_display: str
    overdue_display: str

    @classmethod
    def from_domain(cls, rollup: PartyRollup) -> "PartyRollupSchema":
        return cls(
            total=rollup.total,
            overdue=rollup.overdue,
            count=rollup.count,
            total_display=format_currency(rollup.total),
            overdue_display=format_currency(rollup.overdue),
        )


class PartySchema(BaseModel):
    id: int
    name: str
    type: str
    type_label: str
    gstin: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    credit_limit: Decimal
    credit_period: int

    @classmethod
    def from_domain(cls, party: Party) -> "PartySchema":
        return cls(
            id=party.id,
            name=party.name,
            type=party.type,
            type_label=party_type_label(party.type),
            gstin=party.gstin,
            contact_person=party.contact_person,
            email=party.email,
            phone=party.phone,
            credit_limit=party.credit_limit,
            credit_period=party.credit_period,
        )


class PartySummaryResponse(BaseModel):
    """Response for GET /v1/parties/{party_id}/summary"""

    as_of: date
    party: PartySchema
    receivables: PartyRollupSchema
    payables: PartyRollupSchema
    receivables_ageing: AgeingSchema
    payables_ageing: AgeingSchema
    bnpl_limits: List[LimitUtilizationSchema]


class SyncLogSchema(BaseModel):
    id: int
    sync_type: str
    sync_status: str
    transaction_count: Optional[int] = None
    details: Optional[str] = None
    synced_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, log: TallySyncLog) -> "SyncLogSchema":
        return cls(
            id=log.id,
            sync_type=log.sync_type,
            sync_status=log.sync_status,
            transaction_count=log.transaction_count,
            details=log.details,
            synced_at=log.synced_at,
        )


class PendingSyncsSchema(BaseModel):
    invoices: int
    payments: int
    receipts: int

    @classmethod
    def from_domain(cls, pending: PendingSyncs) -> "PendingSyncsSchema":
        return cls(invoices=pending.invoices, payments=pending.payments, receipts=pending.receipts)


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    as_of: date
    open_payables: OpenBalanceSchema
    open_receivables: OpenBalanceSchema
    receivables_ageing: AgeingSchema
    payables_ageing: AgeingSchema
    purchase_bnpl_limits: List[LimitUtilizationSchema]
    sales_bnpl_limits: List[LimitUtilizationSchema]
    recent_transactions: List[TransactionSchema]
    recent_sync_log: Optional[SyncLogSchema] = None
    pending_syncs: PendingSyncsSchema


class TallySyncRequest(BaseModel):
    """Request body for POST /v1/tally-sync"""

    sync_type: Literal["push", "pull"] = "pull"


class TallySyncResponse(BaseModel):
    """Response for POST /v1/tally-sync"""

    message: str
    log: SyncLogSchema
