"""SQLAlchemy ORM models for the payment history read by risk scoring"""

import uuid
from sqlalchemy import Column, DateTime, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class PaymentRecord(Base):
    """Payment previously executed for a payer (written by the payments service)"""

    __tablename__ = "payment_record"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    payer = Column(Text, nullable=False, index=True)
    recipient = Column(Text, nullable=True)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(10), nullable=False, default="USDC")
    source = Column(String(16), nullable=True)  # chat | invoice | voice
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
