"""Date manipulation utilities"""

import math
from datetime import date, datetime, timedelta

from ledger_gateway.domain.exceptions import ValidationError

ONE_DAY = timedelta(days=1)


def days_overdue(due_date: date | datetime | None, today: date | datetime) -> int:
    """
    Whole days past the due date, floored at zero.

    Rounds partial days up, so a due date one second in the past counts as
    one day overdue. Due today (or in the future, or no due date) is 0.
    Every overdue badge and every ageing bucket goes through this function.
    """
    if due_date is None:
        return 0
    days = math.ceil((today - due_date) / ONE_DAY)
    return days if days > 0 else 0


def days_between(start: date, end: date) -> int:
    """Signed whole days from start to end"""
    return (end - start).days


def parse_api_date(value: object) -> date | None:
    """
    Parse a date coming from the ERP API.

    Accepts None, date/datetime objects, and ISO-8601 strings such as
    "2026-10-18" or "2026-10-18T00:00:00.000Z". Datetimes are truncated to
    their calendar date.

    Raises:
        ValidationError: For anything that is not a recognisable date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise ValidationError(f"Malformed date: {value!r}") from e
    raise ValidationError(f"Malformed date: {value!r}")
