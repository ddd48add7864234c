"""BNPL / credit limit utilization"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.domain.formatting import format_date, format_short_date
from ledger_gateway.domain.models import BnplLimit, LimitUtilization, ZERO
from ledger_gateway.utils.date_utils import days_between

LIMIT_TYPES = ("purchase", "sales")


def utilization_percent(used_limit: Decimal, total_limit: Decimal) -> int:
    """
    Percentage of the limit in use, rounded half-up to a whole number.

    - total_limit == 0 -> 0 (no division, not an error)
    - used above total -> more than 100, never clamped

    Examples:
        150000 / 250000 -> 60
        1 / 3 -> 33 (33.33...)
        67 / 200 -> 34 (33.5 rounds up)

    Raises:
        ValidationError: Negative used or total limit
    """
    if total_limit < ZERO or used_limit < ZERO:
        raise ValidationError(f"Negative limit values: used={used_limit} total={total_limit}")
    if total_limit == ZERO:
        return 0

    percent = Decimal(used_limit) / Decimal(total_limit) * 100
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def limit_utilization(limit: BnplLimit, today: date) -> LimitUtilization:
    """Utilization, headroom and expiry proximity of one limit"""
    percent = utilization_percent(limit.used_limit, limit.total_limit)
    available = limit.total_limit - limit.used_limit

    days_to_expiry = None
    if limit.expiry_date is not None:
        days_to_expiry = days_between(today, limit.expiry_date)

    return LimitUtilization(
        limit=limit,
        utilization_percent=percent,
        available=available,
        over_limit=available < ZERO,
        days_to_expiry=days_to_expiry,
        expired=days_to_expiry is not None and days_to_expiry < 0,
        expiry_display=format_date(limit.expiry_date) or None,
        expiry_short_display=format_short_date(limit.expiry_date) or None,
    )


def limits_of_type(limits: Iterable[BnplLimit], limit_type: str) -> List[BnplLimit]:
    """Purchase or sales limits, in input order"""
    if limit_type not in LIMIT_TYPES:
        raise ValidationError(f"Unknown limit type: {limit_type}")
    return [limit for limit in limits if limit.limit_type == limit_type]
