"""
Business Manager Backend — Editing Project Model
================================================

What:  ORM model for the `editing_projects` table.

Commission:
    commission_amount = round_half_up(editing_value * commission_percentage / 100)
    computed once at creation and never recomputed.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin

PROJECT_STATUS_IN_PROGRESS = "in_progress"
PROJECT_STATUS_COMPLETED = "completed"


class EditingProject(IdMixin, TimestampMixin, Base):
    __tablename__ = "editing_projects"

    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    editor_id: Mapped[str] = mapped_column(String(36), nullable=False)
    project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    editing_value: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    pendrive_included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pendrive_value: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    total_amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    received_payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    remaining_payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    commission_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    commission_amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completion_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PROJECT_STATUS_IN_PROGRESS
    )
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("idx_editing_projects_shop_name", "shop_name"),
        Index("idx_editing_projects_editor_id", "editor_id"),
        Index("idx_editing_projects_end_date", "end_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<EditingProject(id={self.id}, name='{self.project_name}', "
            f"status='{self.status}')>"
        )
