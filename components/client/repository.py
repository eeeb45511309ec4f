"""Repository for client operations."""

from datetime import date
from typing import List, Optional
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import commit_or_rollback
from components.core.errors import NotFoundError, ValidationError
from components.core.validators import require_amount, require_day_of_month, require_text
from components.client.models import Client
from components.client import schemas
from components.payment.billing import initial_due_date
from components.payment.models import Payment, STATUS_PENDING
from components.program.models import Program


class ClientRepository:
    """Repository for client operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _require_program(self, program_id: int) -> Program:
        program = await self.session.get(Program, program_id)
        if program is None:
            raise ValidationError("program_id", f"program {program_id} does not exist")
        return program

    async def create(self, client: schemas.ClientCreate, today: date) -> Client:
        """
        Enroll a new client.

        The first payment obligation for the current month is written
        in the same transaction as the client row.
        """
        name = require_text("name", client.name)
        phone = require_text("phone", client.phone)
        amount = require_amount("payment_amount", client.payment_amount)
        due_day = require_day_of_month("due_date", client.due_date)
        await self._require_program(client.program_id)

        db_client = Client(
            name=name,
            phone=phone,
            program_id=client.program_id,
            payment_amount=amount,
            due_date=due_day,
        )
        db_client.payments.append(
            Payment(
                payment_date=today,
                amount=amount,
                due_date=initial_due_date(today, due_day),
                status=STATUS_PENDING,
                sms_sent=False,
            )
        )
        self.session.add(db_client)
        await commit_or_rollback(self.session)
        await self.session.refresh(db_client)
        return db_client

    async def get_by_id(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        return await self.session.get(Client, client_id)

    async def get_all(self) -> List[schemas.ClientWithProgram]:
        """Get all clients with their program name, ordered by name."""
        result = await self.session.execute(
            select(Client, Program.name)
            .outerjoin(Program, Client.program_id == Program.id)
            .order_by(Client.name)
        )
        return [
            schemas.ClientWithProgram(
                **schemas.Client.model_validate(client).model_dump(),
                program_name=program_name,
            )
            for client, program_name in result.all()
        ]

    async def update(self, client_id: int, client: schemas.ClientUpdate) -> Client:
        """
        Update client by ID.

        Only the supplied fields change. Existing payments keep their
        amount and due date; the new values apply from the next cycle.
        """
        db_client = await self.get_by_id(client_id)
        if db_client is None:
            raise NotFoundError("Client", client_id)

        fields = client.model_dump(exclude_unset=True)
        changes = {}
        if "name" in fields:
            changes["name"] = require_text("name", fields["name"])
        if "phone" in fields:
            changes["phone"] = require_text("phone", fields["phone"])
        if "payment_amount" in fields:
            changes["payment_amount"] = require_amount("payment_amount", fields["payment_amount"])
        if "due_date" in fields:
            changes["due_date"] = require_day_of_month("due_date", fields["due_date"])
        if "program_id" in fields:
            if fields["program_id"] is None:
                raise ValidationError("program_id", "must not be empty")
            await self._require_program(fields["program_id"])
            changes["program_id"] = fields["program_id"]

        for key, value in changes.items():
            setattr(db_client, key, value)

        await commit_or_rollback(self.session)
        await self.session.refresh(db_client)
        return db_client

    async def delete(self, client_id: int) -> tuple[int, int]:
        """
        Delete client by ID together with its payments.

        Returns (clients_deleted, payments_deleted).
        """
        if await self.get_by_id(client_id) is None:
            raise NotFoundError("Client", client_id)

        payments = await self.session.execute(
            select(func.count(Payment.id)).where(Payment.client_id == client_id)
        )
        payments_deleted = payments.scalar_one()

        await self.session.execute(delete(Payment).where(Payment.client_id == client_id))
        result = await self.session.execute(delete(Client).where(Client.id == client_id))
        await commit_or_rollback(self.session)
        return result.rowcount, payments_deleted
