"""Repository for dashboard statistics."""

from datetime import date
from sqlalchemy import select, func, case, and_
from sqlalchemy.ext.asyncio import AsyncSession

from components.dashboard import schemas
from components.payment import billing
from components.payment.models import Payment, STATUS_PAID, STATUS_PENDING


class DashboardRepository:
    """Read-only aggregates over the payment ledger."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_stats(self, today: date) -> schemas.DashboardStats:
        """
        Get counts and sums for payments due in the month containing ``today``.

        Returns:
            - paid_count / total_received for paid payments
            - pending_count / total_pending for pending payments (overdue included)
            - overdue_count for pending payments already past due
            - total_count / total_expected across both
        """
        first, last = billing.month_bounds(today)
        is_paid = Payment.status == STATUS_PAID
        is_pending = Payment.status == STATUS_PENDING

        result = await self.session.execute(
            select(
                func.count(case((is_paid, 1))),
                func.count(case((is_pending, 1))),
                func.count(case((and_(is_pending, Payment.due_date < today), 1))),
                func.sum(case((is_paid, Payment.amount), else_=0)),
                func.sum(case((is_pending, Payment.amount), else_=0)),
            ).where(Payment.due_date >= first, Payment.due_date <= last)
        )
        paid_count, pending_count, overdue_count, received, pending = result.one()

        total_received = billing.to_money(received)
        total_pending = billing.to_money(pending)

        return schemas.DashboardStats(
            period_start=first,
            period_end=last,
            paid_count=paid_count or 0,
            total_received=total_received,
            pending_count=pending_count or 0,
            total_pending=total_pending,
            overdue_count=overdue_count or 0,
            total_count=(paid_count or 0) + (pending_count or 0),
            total_expected=total_received + total_pending,
        )
