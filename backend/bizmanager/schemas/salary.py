"""
Business Manager Backend — Salary Schemas
=========================================

What:  Request bodies and response rows for /api/salary.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from bizmanager.schemas.common import CamelModel, RowModel


class SalaryCreate(CamelModel):
    employee_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    salary_type: str = Field(min_length=1)
    related_order: Optional[str] = None
    related_project: Optional[str] = None
    description: str = ""
    work_date: Optional[datetime] = None


class SalaryPayRequest(CamelModel):
    """Body of POST /api/salary/pay. `shopName`, when given, must match the employee's shop."""
    employee_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    shop_name: Optional[str] = None


class SalaryRead(RowModel):
    id: str
    employee_id: str
    amount: float
    salary_type: str
    related_order_id: Optional[str] = None
    related_project_id: Optional[str] = None
    description: str
    work_date: Optional[datetime] = None
    is_paid: bool
    paid_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SalaryWithEmployee(SalaryRead):
    """A salary row joined with its employee's name, role and shop."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    shop_name: Optional[str] = None


class SalarySummary(CamelModel):
    total_earnings: float = 0
    paid_salary: float = 0
    remaining_salary: float = 0
    salaries: List[SalaryRead] = []


class SalaryCreated(CamelModel):
    message: str
    salary_id: str


class SalaryPaid(CamelModel):
    message: str
    paid_amount: float
    paid_salaries: int
