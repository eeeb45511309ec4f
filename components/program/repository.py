"""Repository for program operations."""

from typing import List, Optional
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import commit_or_rollback
from components.core.errors import ConflictError, NotFoundError
from components.core.validators import require_amount, require_text
from components.client.models import Client
from components.program.models import Program
from components.program import schemas


class ProgramRepository:
    """Repository for program operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, program: schemas.ProgramCreate) -> Program:
        """Create a new program."""
        db_program = Program(
            name=require_text("name", program.name),
            price=require_amount("price", program.price),
        )
        self.session.add(db_program)
        await commit_or_rollback(self.session)
        await self.session.refresh(db_program)
        return db_program

    async def get_by_id(self, program_id: int) -> Optional[Program]:
        """Get program by ID."""
        return await self.session.get(Program, program_id)

    async def get_all(self) -> List[Program]:
        """Get all programs ordered by name."""
        result = await self.session.execute(select(Program).order_by(Program.name))
        return list(result.scalars().all())

    async def count_clients(self, program_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Client.id)).where(Client.program_id == program_id)
        )
        return result.scalar_one()

    async def delete(self, program_id: int) -> int:
        """
        Delete program by ID.

        Clients are never reassigned automatically: a program that is
        still referenced raises ConflictError.
        """
        if await self.get_by_id(program_id) is None:
            raise NotFoundError("Program", program_id)

        referencing = await self.count_clients(program_id)
        if referencing:
            raise ConflictError(
                f"Program {program_id} is still assigned to {referencing} client(s)"
            )

        result = await self.session.execute(delete(Program).where(Program.id == program_id))
        await commit_or_rollback(self.session)
        return result.rowcount
