"""
Business Manager Backend — Payment Model
========================================

What:  ORM model for the `payments` table. Rows are never updated; a
       correction is a delete followed by a new payment.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin


class Payment(IdMixin, TimestampMixin, Base):
    __tablename__ = "payments"

    order_id: Mapped[str] = mapped_column(String(36), nullable=False)
    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    amount: Mapped[float] = mapped_column(Money, nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False, default="cash")
    received_by: Mapped[str] = mapped_column(String(36), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("idx_payments_order_id", "order_id"),
        Index("idx_payments_client_id", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, order={self.order_id}, amount={self.amount})>"
