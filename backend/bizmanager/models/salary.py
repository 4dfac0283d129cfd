"""
Business Manager Backend — Salary Model
=======================================

What:  ORM model for the `salaries` table: one unit of owed compensation.

Lifecycle:
    1. Created unpaid when an order / project assigns the employee, or
       manually through POST /api/salary/
    2. Paid whole (is_paid flipped, paid_date stamped), or split by the
       allocator into a paid portion (new row) and a smaller unpaid row
    3. Deleted together with its order / project, or individually

Allocation order is oldest first: (created_at, id).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin

SALARY_TYPE_ORDER_WORK = "order_work"
SALARY_TYPE_TRANSPORT_WORK = "transport_work"
SALARY_TYPE_EDITING_WORK = "editing_work"


class Salary(IdMixin, TimestampMixin, Base):
    __tablename__ = "salaries"

    employee_id: Mapped[str] = mapped_column(String(36), nullable=False)
    amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    salary_type: Mapped[str] = mapped_column(String(50), nullable=False)
    related_order_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    related_project_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    work_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    paid_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_salaries_employee_unpaid", "employee_id", "is_paid", "created_at"),
        Index("idx_salaries_related_order_id", "related_order_id"),
        Index("idx_salaries_related_project_id", "related_project_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Salary(id={self.id}, employee={self.employee_id}, "
            f"amount={self.amount}, paid={self.is_paid})>"
        )
