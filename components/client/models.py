"""Client model for the database."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, func
from sqlalchemy.orm import relationship

from components.core.database import Base


class Client(Base):
    """Client model representing a person enrolled in a program."""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(32), nullable=False)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False)
    payment_amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Integer, nullable=False)  # Day of month, 1-31
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    program = relationship("Program", back_populates="clients")
    payments = relationship("Payment", back_populates="client", cascade="all, delete-orphan")
