"""
Business Manager Backend — Editing Project Schemas
==================================================

What:  Request bodies and response rows for /api/editing.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bizmanager.schemas.common import CamelModel, RowModel


class ProjectCreate(CamelModel):
    client_id: str = Field(min_length=1)
    editor_id: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    editing_value: float = Field(gt=0)
    total_amount: float = Field(gt=0)
    commission_percentage: float = Field(gt=0, le=100)
    end_date: datetime
    shop_name: str = Field(min_length=1)
    created_by: str = Field(min_length=1)
    description: str = ""
    pendrive_included: bool = False
    pendrive_value: float = Field(default=0, ge=0)
    received_payment: float = Field(default=0, ge=0)
    start_date: Optional[datetime] = None


class ProjectRead(RowModel):
    id: str
    client_id: str
    editor_id: str
    project_name: str
    description: str
    editing_value: float
    pendrive_included: bool
    pendrive_value: float
    total_amount: float
    received_payment: float
    remaining_payment: float
    commission_percentage: float
    commission_amount: float
    start_date: datetime
    end_date: datetime
    completion_date: Optional[datetime] = None
    status: str
    created_by: str
    shop_name: str
    created_at: datetime
    updated_at: datetime


class ProjectCreated(CamelModel):
    message: str
    project_id: str
