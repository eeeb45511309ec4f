"""Dashboard endpoints for the API."""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.dashboard.repository import DashboardRepository
from components.dashboard import schemas
from restapi.endpoints.helpers import get_today

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)


@router.get("/stats", response_model=schemas.DashboardStats)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Get payment totals for the current month.

    Returns:
    - Number and sum of paid payments
    - Number and sum of pending payments (overdue included)
    - Number of overdue payments
    - Expected total across both
    """
    repo = DashboardRepository(db)
    return await repo.get_stats(today)
