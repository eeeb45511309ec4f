"""
Billing cycle rules: due-date clamping, roll-forward and derived payment state.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from components.payment.models import STATUS_PAID, STATUS_PENDING

STATE_OVERDUE = "overdue"
CENTS = Decimal("0.01")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_due_date(year: int, month: int, anchor_day: int) -> date:
    """
    Resolve a day-of-month anchor inside the given month.

    Anchors past the end of a short month land on its last day,
    e.g. an anchor of 31 in February 2025 gives 2025-02-28.
    """
    return date(year, month, min(anchor_day, days_in_month(year, month)))


def add_months(start: date, months: int, anchor_day: int | None = None) -> date:
    """Move ``start`` by whole months, re-applying the anchor day in the target month."""
    y = start.year + (start.month - 1 + months) // 12
    m = (start.month - 1 + months) % 12 + 1
    return clamp_due_date(y, m, anchor_day or start.day)


def initial_due_date(today: date, anchor_day: int) -> date:
    """Due date of the first obligation created at enrollment (current month)."""
    return clamp_due_date(today.year, today.month, anchor_day)


def next_due_date(previous_due: date, anchor_day: int) -> date:
    """Due date of the successor obligation, one calendar month later."""
    return add_months(previous_due, 1, anchor_day)


def month_bounds(today: date) -> tuple[date, date]:
    first = today.replace(day=1)
    return first, first.replace(day=days_in_month(today.year, today.month))


def reminder_target_date(today: date) -> date:
    """Payments due on this date are exactly one day overdue."""
    return today - timedelta(days=1)


def payment_state(status: str, due_date: date, today: date) -> str:
    """Derive paid / pending / overdue; overdue is never stored."""
    if status == STATUS_PAID:
        return STATUS_PAID
    if status == STATUS_PENDING and due_date < today:
        return STATE_OVERDUE
    return STATUS_PENDING


def to_money(value) -> Decimal:
    """Coerce a stored or summed amount to a two-place Decimal."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
