"""
Business Manager Backend — Client Schemas
=========================================

What:  Request bodies and response rows for /api/clients.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from bizmanager.schemas.common import CamelModel, RowModel, wire_field


class ClientCreate(CamelModel):
    name: str = Field(min_length=1)
    shop_name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    address: str = ""
    client_type: str = "individual"
    business_category: str = "mixed"
    priority_level: str = "normal"
    notes: str = ""


class ClientUpdate(CamelModel):
    """Contact fields only; omitted fields keep their stored value."""
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientRead(RowModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    shop_name: str
    client_type: str
    business_category: str
    priority_level: str
    notes: str
    total_payments_due: float
    received_payments: float
    pending_payments: float
    lifetime_orders: int
    lifetime_editing_projects: int
    created_at: datetime
    updated_at: datetime


class ClientSaved(BaseModel):
    message: str
    client: ClientRead


class WorkHistoryItem(CamelModel):
    id: str
    type: str
    name: str
    total_amount: float
    received_payment: float
    remaining_payment: float
    status: str
    date: datetime
    is_paid: bool


class ClientBalance(CamelModel):
    id: str = wire_field("id", "_id")
    name: str
    total_payments_due: float
    received_payments: float
    pending_payments: float


class WorkHistoryResponse(CamelModel):
    client: ClientBalance
    work_history: List[WorkHistoryItem]
