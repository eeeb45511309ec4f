"""Payment model for the database."""

from sqlalchemy import Boolean, Column, Integer, String, Date, DateTime, ForeignKey, Numeric, func, false
from sqlalchemy.orm import relationship

from components.core.database import Base

STATUS_PENDING = "pending"
STATUS_PAID = "paid"


class Payment(Base):
    """Payment model for one billing-cycle obligation."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_date = Column(Date, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    status = Column(String(16), nullable=False, default=STATUS_PENDING, server_default=STATUS_PENDING)
    sms_sent = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    client = relationship("Client", back_populates="payments")
