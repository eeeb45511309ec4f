"""Script to seed sample programs and clients into the database."""

from datetime import date
from decimal import Decimal
import asyncio

from sqlalchemy import delete

from components.core.init_db import db_manager, init_db
from components.client.models import Client
from components.client.repository import ClientRepository
from components.client.schemas import ClientCreate
from components.payment.models import Payment
from components.program.models import Program
from components.program.repository import ProgramRepository
from components.program.schemas import ProgramCreate


async def seed_data():
    """Seed sample data into the database."""
    await init_db()
    async with db_manager.get_db() as db:
        # Clear existing data
        await db.execute(delete(Payment))
        await db.execute(delete(Client))
        await db.execute(delete(Program))
        await db.commit()

        programs = ProgramRepository(db)
        strength = await programs.create(ProgramCreate(name="Strength Training", price=Decimal("120.00")))
        yoga = await programs.create(ProgramCreate(name="Yoga", price=Decimal("80.00")))
        coaching = await programs.create(ProgramCreate(name="Personal Coaching", price=Decimal("250.00")))

        clients = ClientRepository(db)
        today = date.today()
        for name, phone, program, amount, due_day in [
            ("Maria Lopez", "+15550000001", strength, "120.00", 1),
            ("James Carter", "+15550000002", yoga, "70.00", 15),
            ("Aisha Khan", "+15550000003", coaching, "250.00", 31),
        ]:
            await clients.create(
                ClientCreate(
                    name=name,
                    phone=phone,
                    program_id=program.id,
                    payment_amount=Decimal(amount),
                    due_date=due_day,
                ),
                today,
            )
    await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(seed_data())
