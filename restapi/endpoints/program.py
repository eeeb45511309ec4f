"""Program endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import BillingError
from components.core.init_db import get_db
from components.program.repository import ProgramRepository
from components.program import schemas
from restapi.endpoints.helpers import to_http_exception

router = APIRouter(
    prefix="/api/programs",
    tags=["programs"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Program])
async def read_programs(db: AsyncSession = Depends(get_db)):
    """Get all programs ordered by name."""
    repo = ProgramRepository(db)
    return await repo.get_all()


@router.post("", response_model=schemas.Program, status_code=201)
async def create_program(
    program: schemas.ProgramCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new program."""
    repo = ProgramRepository(db)
    try:
        return await repo.create(program)
    except BillingError as exc:
        raise to_http_exception(exc)


@router.delete("/{program_id}", response_model=schemas.ProgramDeleted)
async def delete_program(
    program_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a program.

    Rejected with 409 while any client is still enrolled in it;
    move those clients to another program first.
    """
    repo = ProgramRepository(db)
    try:
        deleted = await repo.delete(program_id)
    except BillingError as exc:
        raise to_http_exception(exc)
    return schemas.ProgramDeleted(deleted=deleted)
