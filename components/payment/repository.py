"""Repository for payment operations."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from components.core.database import commit_or_rollback
from components.core.errors import NotFoundError, PersistenceError, ValidationError
from components.core.validators import require_amount
from components.client.models import Client
from components.payment import billing
from components.payment import schemas
from components.payment.models import Payment, STATUS_PAID, STATUS_PENDING
from components.program.models import Program

logger = structlog.get_logger(__name__)


@dataclass
class MarkPaidResult:
    """Outcome of a mark-paid call; successor is None when nothing transitioned."""
    payment: Payment
    successor: Optional[Payment] = None


class PaymentRepository:
    """Repository for payment operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    @staticmethod
    def _detail_query():
        return (
            select(Payment, Client.name, Client.phone, Program.name)
            .join(Client, Payment.client_id == Client.id)
            .outerjoin(Program, Client.program_id == Program.id)
        )

    @staticmethod
    def _to_detail(row, today: date) -> schemas.PaymentDetail:
        payment, client_name, phone, program_name = row
        return schemas.PaymentDetail(
            **schemas.Payment.model_validate(payment).model_dump(),
            client_name=client_name,
            phone=phone,
            program_name=program_name,
            state=billing.payment_state(payment.status, payment.due_date, today),
        )

    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        return await self.session.get(Payment, payment_id)

    async def get_for_client(self, client_id: int) -> List[Payment]:
        """Get all payments of one client ordered by due date."""
        result = await self.session.execute(
            select(Payment)
            .where(Payment.client_id == client_id)
            .order_by(Payment.due_date, Payment.id)
        )
        return list(result.scalars().all())

    async def get_all(self, today: date) -> List[schemas.PaymentDetail]:
        """Get every payment, newest due date first."""
        result = await self.session.execute(
            self._detail_query().order_by(Payment.due_date.desc(), Payment.id.desc())
        )
        return [self._to_detail(row, today) for row in result.all()]

    async def list_in_range(self, start: date, end: date, today: date) -> List[schemas.PaymentDetail]:
        """Get payments whose due date falls in [start, end], earliest first."""
        if end < start:
            raise ValidationError("end", "must not be before start")
        result = await self.session.execute(
            self._detail_query()
            .where(Payment.due_date >= start, Payment.due_date <= end)
            .order_by(Payment.due_date.asc(), Payment.id.asc())
        )
        return [self._to_detail(row, today) for row in result.all()]

    async def list_current_month(self, today: date) -> List[schemas.PaymentDetail]:
        """Get payments due in the month containing ``today``."""
        first, last = billing.month_bounds(today)
        return await self.list_in_range(first, last, today)

    async def create(self, payment: schemas.PaymentCreate, today: date) -> Payment:
        """
        Create a pending obligation for a client.

        Amount and due date fall back to the client's current
        payment amount and anchor day in the current month.
        """
        client = await self.session.get(Client, payment.client_id)
        if client is None:
            raise NotFoundError("Client", payment.client_id)

        amount = client.payment_amount if payment.amount is None else require_amount("amount", payment.amount)
        due_date = payment.due_date or billing.initial_due_date(today, client.due_date)

        db_payment = Payment(
            client_id=client.id,
            payment_date=today,
            amount=amount,
            due_date=due_date,
            status=STATUS_PENDING,
            sms_sent=False,
        )
        self.session.add(db_payment)
        await commit_or_rollback(self.session)
        await self.session.refresh(db_payment)
        return db_payment

    async def mark_paid(self, payment_id: int, today: date) -> MarkPaidResult:
        """
        Mark a payment paid and roll the client forward to the next cycle.

        The status flip is a guarded update that only matches a pending
        row, so exactly one caller wins the transition and inserts the
        successor. Flip and successor commit together or not at all.
        Calling this on a payment that is already paid returns it
        unchanged with no successor.
        """
        try:
            result = await self.session.execute(
                update(Payment)
                .where(Payment.id == payment_id, Payment.status == STATUS_PENDING)
                .values(status=STATUS_PAID, payment_date=today)
            )
            payment = await self.session.get(Payment, payment_id, populate_existing=True)
            if payment is None:
                await self.session.rollback()
                raise NotFoundError("Payment", payment_id)

            if result.rowcount == 0:
                await self.session.commit()
                logger.info("payment.already_paid", payment_id=payment_id)
                return MarkPaidResult(payment=payment)

            client = await self.session.get(Client, payment.client_id)
            if client is None:
                await self.session.rollback()
                raise NotFoundError("Client", payment.client_id)

            successor = Payment(
                client_id=client.id,
                payment_date=today,
                amount=client.payment_amount,
                due_date=billing.next_due_date(payment.due_date, client.due_date),
                status=STATUS_PENDING,
                sms_sent=False,
            )
            self.session.add(successor)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError(str(exc)) from exc

        logger.info(
            "payment.marked_paid",
            payment_id=payment.id,
            client_id=client.id,
            successor_id=successor.id,
            next_due_date=successor.due_date.isoformat(),
        )
        return MarkPaidResult(payment=payment, successor=successor)
