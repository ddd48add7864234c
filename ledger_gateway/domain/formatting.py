"""Display formatting for amounts, dates, statuses and document types"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

TRANSACTION_TYPE_LABELS = {
    "sales_invoice": "Sales Invoice",
    "receipt": "Receipt",
    "debit_note": "Debit Note",
    "sales_order": "Sales Order",
    "quotation": "Quotation",
    "quotation_request": "Quotation Request",
    "estimate": "Estimate",
    "delivery_note": "Delivery Note",
    "purchase_bill": "Purchase Bill",
    "payment": "Payment",
    "credit_note": "Credit Note",
    "purchase_order": "Purchase Order",
    "purchase_quotation": "Vendor Quotation",
    "purchase_quotation_request": "Purchase Quotation Request",
    "grn": "Goods Receipt Note",
}

PARTY_TYPE_LABELS = {
    "customer": "Customer",
    "vendor": "Vendor",
    "both": "Customer & Vendor",
}

STATUS_COLORS = {
    "yellow": ("pending", "packing", "shipped", "order_placed", "in_transit"),
    "green": (
        "completed",
        "paid",
        "approved",
        "delivered",
        "accepted",
        "goods_received",
        "vendor_accepted",
        "fully_adjusted",
    ),
    "red": ("overdue", "cancelled", "rejected", "vendor_rejected"),
    "purple": ("using_bnpl",),
    "gray": ("draft", "closed"),
    "blue": ("partially_paid", "partially_billed", "partially_received", "partially_adjusted"),
    "emerald": ("open", "responded", "received"),
    "sky": ("sent", "billed", "invoice_received", "refund_received"),
}

_COLOR_BY_STATUS = {status: color for color, statuses in STATUS_COLORS.items() for status in statuses}


def _group_indian(digits: str) -> str:
    # Last three digits, then pairs: 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Decimal | int | None) -> str:
    """
    Rupee amount with Indian digit grouping and no paise.

    Example:
        Decimal("123456.78") -> "₹1,23,457"
    """
    value = Decimal(amount or 0).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(value)))}"


def format_date(value: date | None) -> str:
    """05 Mar 2026"""
    if value is None:
        return ""
    return f"{value.day:02d} {MONTHS[value.month - 1]} {value.year}"


def format_short_date(value: date | None) -> str:
    """05 Mar"""
    if value is None:
        return ""
    return f"{value.day:02d} {MONTHS[value.month - 1]}"


def _title_words(tag: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in tag.split("_"))


def status_label(status: str) -> str:
    return _title_words(status)


def status_color(status: str) -> str:
    return _COLOR_BY_STATUS.get(status, "gray")


def transaction_type_label(transaction_type: str) -> str:
    return TRANSACTION_TYPE_LABELS.get(transaction_type) or _title_words(transaction_type)


def party_type_label(party_type: str) -> str:
    return PARTY_TYPE_LABELS.get(party_type, party_type)
