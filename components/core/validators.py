"""Field checks shared by the ledger repositories."""

from decimal import Decimal, InvalidOperation

from components.core.errors import ValidationError


def require_text(field: str, value: str | None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, "must not be empty")
    return str(value).strip()


def require_amount(field: str, value) -> Decimal:
    """Non-negative currency amount."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(field, "must be a number")
    if not amount.is_finite():
        raise ValidationError(field, "must be a number")
    if amount < 0:
        raise ValidationError(field, "must not be negative")
    return amount


def require_day_of_month(field: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 31:
        raise ValidationError(field, "must be a day of month between 1 and 31")
    return value
