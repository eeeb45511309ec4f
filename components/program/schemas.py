"""Pydantic schemas for program data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class ProgramCreate(BaseModel):
    """Schema for program creation."""
    name: str
    price: Decimal


class Program(BaseModel):
    """Schema for program response."""
    id: int
    name: str
    price: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProgramDeleted(BaseModel):
    deleted: int
