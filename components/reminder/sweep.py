"""Daily scan for payments that became overdue yesterday."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import AsyncContextManager, Callable, List

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import commit_or_rollback
from components.core.errors import PersistenceError, TransientDeliveryError
from components.client.models import Client
from components.payment import billing
from components.payment.models import Payment, STATUS_PENDING
from components.reminder.gateway import NotificationGateway

logger = structlog.get_logger(__name__)

SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]

REMINDER_TEMPLATE = (
    "Hi {name}, this is a reminder that your payment of ${amount} was due yesterday. "
    "Please make your payment at your earliest convenience. Thank you!"
)


@dataclass
class ReminderCandidate:
    payment_id: int
    client_name: str
    phone: str
    amount: Decimal
    due_date: date


@dataclass
class SweepReport:
    target_date: date
    candidates: int = 0
    sent: int = 0
    failed: int = 0
    notified_payment_ids: List[int] = field(default_factory=list)


def render_reminder(name: str, amount) -> str:
    return REMINDER_TEMPLATE.format(name=name, amount=billing.to_money(amount))


class ReminderSweep:
    """
    Sends one reminder per payment that is exactly one day overdue.

    A payment is a candidate when it is pending, due on ``today - 1``
    and has no reminder recorded. ``sms_sent`` is only set after the
    gateway reports delivery; a failed send stays unflagged and, since
    the payment leaves the one-day window tomorrow, is not retried.
    """

    def __init__(self, session_factory: SessionFactory, gateway: NotificationGateway):
        self._session_factory = session_factory
        self._gateway = gateway

    @staticmethod
    async def find_candidates(session: AsyncSession, target_date: date) -> List[ReminderCandidate]:
        result = await session.execute(
            select(Payment.id, Client.name, Client.phone, Payment.amount, Payment.due_date)
            .join(Client, Payment.client_id == Client.id)
            .where(
                Payment.status == STATUS_PENDING,
                Payment.due_date == target_date,
                Payment.sms_sent.is_(False),
            )
            .order_by(Payment.id)
        )
        return [ReminderCandidate(*row) for row in result.all()]

    @staticmethod
    async def _record_sent(session: AsyncSession, payment_id: int) -> None:
        try:
            await session.execute(
                update(Payment)
                .where(Payment.id == payment_id, Payment.sms_sent.is_(False))
                .values(sms_sent=True)
            )
        except SQLAlchemyError as exc:
            await session.rollback()
            raise PersistenceError(str(exc)) from exc
        await commit_or_rollback(session)

    async def _deliver(self, candidate: ReminderCandidate) -> bool:
        body = render_reminder(candidate.client_name, candidate.amount)
        try:
            return await self._gateway.send(candidate.phone, body)
        except TransientDeliveryError as exc:
            logger.error("reminder.delivery_error", payment_id=candidate.payment_id, err=str(exc))
            return False
        except Exception:
            # any other gateway failure counts as undelivered
            logger.exception("reminder.delivery_error", payment_id=candidate.payment_id)
            return False

    async def run(self, today: date) -> SweepReport:
        target_date = billing.reminder_target_date(today)
        log = logger.bind(target_date=target_date.isoformat())
        report = SweepReport(target_date=target_date)
        log.info("reminder.sweep_started")

        async with self._session_factory() as session:
            try:
                candidates = await self.find_candidates(session, target_date)
                # release the read transaction before talking to the gateway
                await session.commit()
            except SQLAlchemyError as exc:
                log.error("reminder.sweep_aborted", stage="read", err=str(exc))
                raise PersistenceError(str(exc)) from exc

            report.candidates = len(candidates)
            log.info("reminder.candidates_found", count=report.candidates)

            for candidate in candidates:
                if not await self._deliver(candidate):
                    report.failed += 1
                    log.warning("reminder.not_delivered", payment_id=candidate.payment_id)
                    continue

                try:
                    await self._record_sent(session, candidate.payment_id)
                except PersistenceError as exc:
                    log.error(
                        "reminder.sweep_aborted",
                        stage="record",
                        payment_id=candidate.payment_id,
                        err=str(exc),
                    )
                    raise

                report.sent += 1
                report.notified_payment_ids.append(candidate.payment_id)
                log.info("reminder.processed", payment_id=candidate.payment_id, client=candidate.client_name)

        log.info("reminder.sweep_finished", sent=report.sent, failed=report.failed)
        return report
