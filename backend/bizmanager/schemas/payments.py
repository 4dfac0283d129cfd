"""
Business Manager Backend — Payment Schemas
==========================================

What:  Request bodies and response rows for /api/payments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bizmanager.schemas.common import CamelModel, RowModel


class PaymentCreate(CamelModel):
    order_id: str = Field(min_length=1)
    client_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    payment_date: datetime
    received_by: str = Field(min_length=1)
    shop_name: str = Field(min_length=1)
    payment_method: str = "cash"
    notes: str = ""


class PaymentRead(RowModel):
    """A payment row joined with the receiving user (and, per client, the order)."""
    id: str
    order_id: str
    client_id: str
    amount: float
    payment_date: datetime
    payment_method: str
    received_by: str
    notes: str
    shop_name: str
    created_at: datetime
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    order_name: Optional[str] = None
    order_date: Optional[datetime] = None


class PaymentCreated(CamelModel):
    message: str
    payment_id: str
