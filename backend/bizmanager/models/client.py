"""
Business Manager Backend — Client Model
=======================================

What:  ORM model for the `clients` table, one row per customer per shop.

Ledger fields:
    total_payments_due   sum of total_amount over the client's orders/projects
    received_payments    money received against those
    pending_payments     total_payments_due - received_payments
"""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin


class Client(IdMixin, TimestampMixin, Base):
    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_type: Mapped[str] = mapped_column(String(50), nullable=False, default="individual")
    business_category: Mapped[str] = mapped_column(String(50), nullable=False, default="mixed")
    priority_level: Mapped[str] = mapped_column(String(50), nullable=False, default="normal")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ── Ledger ────────────────────────────────────────────────────────────
    total_payments_due: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    received_payments: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    pending_payments: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    lifetime_orders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    lifetime_editing_projects: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_clients_shop_name", "shop_name"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}', shop='{self.shop_name}')>"
