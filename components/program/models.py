"""Program model for the database."""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, func
from sqlalchemy.orm import relationship

from components.core.database import Base


class Program(Base):
    """Program model representing a billing plan."""
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationship with Clients
    clients = relationship("Client", back_populates="program")
