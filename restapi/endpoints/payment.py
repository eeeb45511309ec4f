"""Payment endpoints for the API."""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import BillingError
from components.core.init_db import get_db
from components.payment.repository import PaymentRepository
from components.payment import schemas
from restapi.endpoints.helpers import get_today, to_http_exception

router = APIRouter(
    prefix="/api/payments",
    tags=["payments"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.PaymentDetail])
async def read_payments(
    start: Optional[date] = Query(None, description="Only payments due on or after this date"),
    end: Optional[date] = Query(None, description="Only payments due on or before this date"),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Get payments with client and program details.

    Without a range every payment is returned, newest due date first.
    With both ``start`` and ``end`` the result is limited to that
    inclusive range and ordered by due date ascending.
    """
    repo = PaymentRepository(db)
    if start is None and end is None:
        return await repo.get_all(today)
    try:
        return await repo.list_in_range(start or date.min, end or date.max, today)
    except BillingError as exc:
        raise to_http_exception(exc)


@router.post("", response_model=schemas.Payment, status_code=201)
async def create_payment(
    payment: schemas.PaymentCreate,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """Create a pending payment obligation for a client."""
    repo = PaymentRepository(db)
    try:
        return await repo.create(payment, today)
    except BillingError as exc:
        raise to_http_exception(exc)


@router.get("/current-month", response_model=List[schemas.PaymentDetail])
async def read_current_month_payments(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """Get payments due in the current calendar month, earliest first."""
    repo = PaymentRepository(db)
    return await repo.list_current_month(today)


@router.put("/{payment_id}/mark-paid", response_model=schemas.MarkPaidResponse)
async def mark_payment_paid(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Mark a payment paid and create the client's next payment.

    The next payment is due one month later on the client's day of
    month, for the client's current payment amount. Repeating the
    call on a paid payment does not create another one.
    """
    repo = PaymentRepository(db)
    try:
        result = await repo.mark_paid(payment_id, today)
    except BillingError as exc:
        raise to_http_exception(exc)
    return schemas.MarkPaidResponse(
        payment=schemas.Payment.model_validate(result.payment),
        successor=schemas.Payment.model_validate(result.successor) if result.successor else None,
    )
