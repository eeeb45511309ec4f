"""In-memory database fixtures shared by the test modules."""

import unittest
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import components.core.init_db  # noqa: F401  registers every model on Base
from components.core.database import DatabaseManager
from components.client.repository import ClientRepository
from components.client.schemas import ClientCreate
from components.payment.models import Payment
from components.program.repository import ProgramRepository
from components.program.schemas import ProgramCreate


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory SQLite schema per test; ``today`` pins the calendar."""

    today = date(2025, 4, 10)

    async def asyncSetUp(self):
        engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
        self.db = DatabaseManager(engine)
        await self.db.create_tables()
        self.session_factory = self.db.get_session()
        self.session = self.session_factory()

    async def asyncTearDown(self):
        await self.session.close()
        await self.db.dispose()

    async def make_program(self, name="Strength", price="100.00"):
        return await ProgramRepository(self.session).create(
            ProgramCreate(name=name, price=Decimal(price))
        )

    async def make_client(self, program_id, name="Alex", amount="100.00", due_day=15, today=None, phone="+15550001111"):
        return await ClientRepository(self.session).create(
            ClientCreate(
                name=name,
                phone=phone,
                program_id=program_id,
                payment_amount=Decimal(amount),
                due_date=due_day,
            ),
            today or self.today,
        )

    async def fetch_payments(self, client_id=None):
        """Read payments through a separate session to see committed state only."""
        async with self.session_factory() as session:
            query = select(Payment).order_by(Payment.due_date, Payment.id)
            if client_id is not None:
                query = query.where(Payment.client_id == client_id)
            result = await session.execute(query)
            return list(result.scalars().all())
