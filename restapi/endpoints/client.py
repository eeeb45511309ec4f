"""Client endpoints for the API."""

from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import BillingError
from components.core.init_db import get_db
from components.client.repository import ClientRepository
from components.client import schemas
from restapi.endpoints.helpers import get_today, to_http_exception

router = APIRouter(
    prefix="/api/clients",
    tags=["clients"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.ClientWithProgram])
async def read_clients(db: AsyncSession = Depends(get_db)):
    """Get all clients with their program name."""
    repo = ClientRepository(db)
    return await repo.get_all()


@router.post("", response_model=schemas.Client, status_code=201)
async def create_client(
    client: schemas.ClientCreate,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Enroll a client.

    Also creates the first pending payment, due on the client's
    day of month in the current month (clamped to the month's last day).
    """
    repo = ClientRepository(db)
    try:
        return await repo.create(client, today)
    except BillingError as exc:
        raise to_http_exception(exc)


@router.get("/{client_id}", response_model=schemas.Client)
async def read_client(
    client_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific client by ID."""
    repo = ClientRepository(db)
    client = await repo.get_by_id(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{client_id}", response_model=schemas.Client)
async def update_client(
    client_id: int,
    client: schemas.ClientUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a client. Payments already issued are not changed."""
    repo = ClientRepository(db)
    try:
        return await repo.update(client_id, client)
    except BillingError as exc:
        raise to_http_exception(exc)


@router.delete("/{client_id}", response_model=schemas.ClientDeleted)
async def delete_client(
    client_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete a client together with all of their payments."""
    repo = ClientRepository(db)
    try:
        deleted, payments_deleted = await repo.delete(client_id)
    except BillingError as exc:
        raise to_http_exception(exc)
    return schemas.ClientDeleted(deleted=deleted, payments_deleted=payments_deleted)
