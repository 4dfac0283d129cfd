"""
Business Manager Backend — User and Shop Models
===============================================

What:  ORM models for the `users` and `shops` tables.

Ledger fields on User:
    total_earnings    sum of every salary entry ever credited
    paid_salary       portion of total_earnings already paid out
    remaining_salary  total_earnings - paid_salary (kept in step by services)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin

# Role values. Combined roles grant both capabilities.
ROLE_OWNER = "owner"
ROLE_WORKER = "worker"
ROLE_EDITOR = "editor"
ROLE_TRANSPORTER = "transporter"
ROLE_WORKER_EDITOR = "worker_editor"
ROLE_TRANSPORTER_WORKER = "transporter_worker"

WORKER_ROLES = (ROLE_WORKER, ROLE_WORKER_EDITOR, ROLE_TRANSPORTER_WORKER)
EDITOR_ROLES = (ROLE_EDITOR, ROLE_WORKER_EDITOR)
TRANSPORTER_ROLES = (ROLE_TRANSPORTER, ROLE_TRANSPORTER_WORKER)


class User(IdMixin, TimestampMixin, Base):
    """
    A shop member: the owner or an employee who earns salary entries.

    Lifecycle:
        1. Created by /api/auth/register with zeroed ledger fields
        2. Credited when an order / project / manual salary names them
        3. Debited through the salary allocator or single-entry payment
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # NULL for accounts created through an external identity provider
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    shop_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=ROLE_WORKER)
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    is_from_worker: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    original_worker_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    is_from_editor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    original_editor_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    profile_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    accuracy_rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # ── Ledger ────────────────────────────────────────────────────────────
    total_earnings: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    paid_salary: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    remaining_salary: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    __table_args__ = (
        Index("idx_users_shop_name", "shop_name"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Shop(IdMixin, TimestampMixin, Base):
    """A tenant. Shop names are compared case-insensitively."""

    __tablename__ = "shops"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    business_type: Mapped[str] = mapped_column(String(50), nullable=False, default="mixed")
    created_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Shop(id={self.id}, name='{self.name}')>"
