"""
Business Manager Backend — Transportation Model
===============================================

What:  ORM model for the `transportation` table: equipment moves tied to an
       order or project. Status `delivered` stamps `completed_date`;
       deletion is soft (`is_active`).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin

TRANSPORT_STATUS_PENDING = "pending"
TRANSPORT_STATUS_DELIVERED = "delivered"


class Transportation(IdMixin, TimestampMixin, Base):
    __tablename__ = "transportation"

    related_order_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    related_project_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    client_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    transporter_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    pickup_location: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_location: Mapped[str] = mapped_column(String(255), nullable=False)
    distance: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    transport_fee: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    equipment_list: Mapped[str] = mapped_column(Text, nullable=False, default="")
    transport_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=TRANSPORT_STATUS_PENDING
    )
    completed_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_transportation_shop_name", "shop_name"),
        Index("idx_transportation_transporter_id", "transporter_id"),
    )

    def __repr__(self) -> str:
        return f"<Transportation(id={self.id}, status='{self.status}')>"
