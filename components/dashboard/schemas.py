"""Pydantic schemas for dashboard statistics."""

from datetime import date
from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Payment totals for one billing month."""
    period_start: date
    period_end: date
    paid_count: int
    total_received: float
    pending_count: int  # overdue payments are pending too
    total_pending: float
    overdue_count: int
    total_count: int
    total_expected: float
