"""
Business Manager Backend — Dashboard Schemas
============================================

What:  Computed (never persisted) alert cards and statistics.
"""

from pydantic import BaseModel

from bizmanager.schemas.common import CamelModel


class Alert(BaseModel):
    type: str
    title: str
    message: str
    icon: str
    count: int = 0


class DashboardStats(CamelModel):
    remaining_orders: int = 0
    done_orders: int = 0
    total_payment: float = 0
    received_payment: float = 0
    active_orders: int = 0
    completed_orders: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_earnings: float = 0
    paid_salary: float = 0
    remaining_salary: float = 0
    remaining_client_payments: float = 0
    worker_payments: float = 0
    user_role: str = "unknown"
