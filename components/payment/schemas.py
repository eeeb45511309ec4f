"""Pydantic schemas for payment data validation."""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class PaymentCreate(BaseModel):
    """
    Schema for creating a payment obligation by hand.

    Amount defaults to the client's current payment amount and
    due date to the client's anchor day in the current month.
    """
    client_id: int
    amount: Optional[Decimal] = None
    due_date: Optional[date] = None


class Payment(BaseModel):
    """Schema for payment response."""
    id: int
    client_id: int
    payment_date: date
    amount: float
    due_date: date
    status: str
    sms_sent: bool

    class Config:
        from_attributes = True


class PaymentDetail(Payment):
    """Payment joined with client and program display fields."""
    client_name: str
    phone: str
    program_name: Optional[str] = None
    state: str  # paid / pending / overdue, derived at read time


class MarkPaidResponse(BaseModel):
    """Schema for mark-paid result."""
    payment: Payment
    successor: Optional[Payment] = None
