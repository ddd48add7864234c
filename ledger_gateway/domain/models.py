"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List

ZERO = Decimal("0")

SALES_TRANSACTION_TYPES = (
    "sales_invoice",
    "debit_note",
    "receipt",
    "sales_order",
    "quotation",
    "quotation_request",
    "estimate",
    "delivery_note",
)

PURCHASE_TRANSACTION_TYPES = (
    "purchase_bill",
    "purchase_order",
    "purchase_quotation_request",
    "purchase_quotation",
    "credit_note",
    "payment",
    "grn",  # Goods Receipt Note
)

TRANSACTION_TYPES = SALES_TRANSACTION_TYPES + PURCHASE_TRANSACTION_TYPES

TRANSACTION_STATUSES = (
    # Common
    "draft",
    "pending",
    "approved",
    "completed",
    "rejected",
    "overdue",
    "partially_paid",
    "paid",
    "cancelled",
    "using_bnpl",
    "open",
    "closed",
    # Sales
    "responded",
    "sent",
    "order_placed",
    "packing",
    "shipped",
    "delivered",
    "billed",
    "partially_billed",
    # Purchase
    "received",
    "accepted",
    "partially_received",
    "vendor_accepted",
    "vendor_rejected",
    "goods_received",
    "invoice_received",
    "refund_received",
    "partially_adjusted",
    "fully_adjusted",
    "in_transit",
)


@dataclass(frozen=True)
class Transaction:
    """Sales/purchase document or payment fetched from the ERP API"""

    id: int
    transaction_number: str
    transaction_type: str
    party_id: int | None
    amount: Decimal
    balance_due: Decimal | None  # None: settled or not applicable
    transaction_date: date | None
    due_date: date | None
    status: str
    is_bnpl: bool = False
    is_synced: bool = False
    reference: str | None = None

    @property
    def outstanding(self) -> Decimal:
        """Unpaid remainder, missing balance counts as zero"""
        return self.balance_due if self.balance_due is not None else ZERO


@dataclass(frozen=True)
class Party:
    """Customer or vendor counter-party"""

    id: int
    name: str
    type: str  # "customer", "vendor" or "both"
    gstin: str | None = None
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    city: str | None = None
    state: str | None = None
    credit_limit: Decimal = ZERO
    credit_period: int = 0  # days


@dataclass(frozen=True)
class BnplLimit:
    """Buy-now-pay-later limit granted to a party"""

    id: int
    party_id: int
    limit_type: str  # "purchase" or "sales"
    total_limit: Decimal
    used_limit: Decimal
    expiry_date: date | None


@dataclass(frozen=True)
class TallySyncLog:
    """Outcome of one Tally ERP sync run"""

    id: int
    sync_type: str  # "push" or "pull"
    sync_status: str  # "success" or "failed"
    transaction_count: int | None
    details: str | None
    synced_at: datetime | None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable set of records fetched together for one computation pass"""

    transactions: List[Transaction]
    parties: List[Party]
    bnpl_limits: List[BnplLimit]
    latest_sync: TallySyncLog | None = None


@dataclass
class AgeingBuckets:
    """Outstanding balances split by days overdue"""

    current: Decimal = ZERO
    days1to30: Decimal = ZERO
    days31to60: Decimal = ZERO
    days60plus: Decimal = ZERO
    count: int = 0

    @property
    def total(self) -> Decimal:
        return self.current + self.days1to30 + self.days31to60 + self.days60plus

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            "current": self.current,
            "days1to30": self.days1to30,
            "days31to60": self.days31to60,
            "days60plus": self.days60plus,
        }


@dataclass
class PartyRollup:
    """Per-party totals of open transactions"""

    total: Decimal = ZERO
    overdue: Decimal = ZERO  # Contributed by status == "overdue" only
    count: int = 0


@dataclass
class OpenBalance:
    """Total and count of open transactions of one type"""

    total: Decimal
    count: int


@dataclass
class PartyBalance:
    """Row of the receivables-by-customer / payables-by-vendor views"""

    party: Party
    total_due: Decimal
    total_overdue: Decimal
    invoice_count: int
    last_payment_date: date | None
    oldest_due_date: date | None
    average_collection_days: int | None


@dataclass
class LimitUtilization:
    """Utilization and expiry proximity of a BNPL limit"""

    limit: BnplLimit
    utilization_percent: int
    available: Decimal  # Negative when over limit
    over_limit: bool
    days_to_expiry: int | None
    expired: bool
    expiry_display: str | None
    expiry_short_display: str | None


@dataclass
class PendingSyncs:
    """Transactions not yet synced with Tally"""

    invoices: int = 0
    payments: int = 0
    receipts: int = 0


@dataclass
class DashboardView:
    """Everything the dashboard page shows, derived from one snapshot"""

    open_payables: OpenBalance
    open_receivables: OpenBalance
    receivables_ageing: AgeingBuckets
    payables_ageing: AgeingBuckets
    purchase_bnpl: List[LimitUtilization]
    sales_bnpl: List[LimitUtilization]
    recent_transactions: List[Transaction]
    latest_sync: TallySyncLog | None
    pending_syncs: PendingSyncs = field(default_factory=PendingSyncs)
