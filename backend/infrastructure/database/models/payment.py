"""
Payment receipt model.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class PaymentRecord(Base):
    """Append-only receipt for a subscription payment."""

    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    plan: Mapped[str] = mapped_column(String(100), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_payments_email_paid_at", "email", "paid_at"),
        Index("ix_payments_transaction_id", "transaction_id"),
    )

    def __repr__(self) -> str:
        return f"<PaymentRecord(email={self.email}, transaction_id={self.transaction_id})>"
