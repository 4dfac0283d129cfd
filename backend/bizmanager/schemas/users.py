"""
Business Manager Backend — User Schemas
=======================================

What:  Response rows for /api/users and the per-user statistics summary.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from bizmanager.schemas.common import CamelModel, RowModel


class UserRead(RowModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    shop_name: Optional[str] = None
    phone: str
    total_earnings: float
    paid_salary: float
    remaining_salary: float
    accuracy_rating: Optional[float] = None
    created_at: datetime


class StaffRead(RowModel):
    id: str
    first_name: str
    last_name: str
    role: str
    shop_name: Optional[str] = None


class PerformanceUpdate(CamelModel):
    accuracy_rating: float = Field(ge=0, le=100)


class WorkCount(BaseModel):
    total: int = 0
    completed: int = 0
    remaining: int = 0


class StatisticsUser(BaseModel):
    id: str
    name: str
    role: str


class SalaryTotals(CamelModel):
    total_earnings: float = 0
    paid_salary: float = 0
    remaining_salary: float = 0


class UserStatistics(BaseModel):
    user: StatisticsUser
    orders: WorkCount
    projects: WorkCount
    work: WorkCount
    payments: SalaryTotals
