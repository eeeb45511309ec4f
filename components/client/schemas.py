"""Pydantic schemas for client data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class ClientBase(BaseModel):
    """Base client schema."""
    name: str
    phone: str
    program_id: int
    payment_amount: Decimal
    due_date: int


class ClientCreate(ClientBase):
    """Schema for client enrollment."""
    pass


class ClientUpdate(BaseModel):
    """Schema for client update; omitted fields are left unchanged."""
    name: Optional[str] = None
    phone: Optional[str] = None
    program_id: Optional[int] = None
    payment_amount: Optional[Decimal] = None
    due_date: Optional[int] = None


class Client(BaseModel):
    """Schema for client response."""
    id: int
    name: str
    phone: str
    program_id: int
    payment_amount: float
    due_date: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientWithProgram(Client):
    """Client joined with the name of its program."""
    program_name: Optional[str] = None


class ClientDeleted(BaseModel):
    deleted: int
    payments_deleted: int
