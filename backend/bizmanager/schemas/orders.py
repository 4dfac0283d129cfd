"""
Business Manager Backend — Order Schemas
========================================

What:  Request bodies and response rows for /api/orders.
Who:   Used by routes/orders.py and services/order_service.py.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from bizmanager.schemas.common import CamelModel, IdRef, RowModel, UserRef


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class OrderProductIn(CamelModel):
    name: str = Field(min_length=1)
    quantity: float = 0
    price: float = 0
    size_info: str = ""


class OrderWorkerIn(CamelModel):
    worker: str = Field(min_length=1, description="Assigned worker's user id")
    payment: float = Field(default=0, ge=0)


class OrderTransporterIn(CamelModel):
    transporter: str = Field(min_length=1, description="Assigned transporter's user id")
    payment: float = Field(default=0, ge=0)


class OrderCreate(CamelModel):
    """
    Body of POST /api/orders/.

    `receivedPayment` is the amount already received at booking time and is
    credited to the client like any later payment.
    """
    client_id: str = Field(min_length=1)
    order_name: str = Field(min_length=1)
    venue_place: str = Field(min_length=1)
    total_amount: float = Field(gt=0)
    shop_name: str = Field(min_length=1)
    created_by: str = Field(min_length=1)
    received_payment: float = Field(default=0, ge=0)
    description: str = ""
    order_date: Optional[datetime] = None
    products: Optional[List[OrderProductIn]] = None
    workers: Optional[List[OrderWorkerIn]] = None
    transporters: Optional[List[OrderTransporterIn]] = None


class StatusUpdate(CamelModel):
    """Free-text status; `completed` / `delivered` carry side effects."""
    status: str = Field(min_length=1)


class ReceivedPaymentUpdate(CamelModel):
    received_payment: float = Field(ge=0)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ClientSummary(RowModel):
    id: str
    name: str
    email: str
    phone: str


class OrderProductRead(RowModel):
    id: str
    name: str
    quantity: float
    price: float
    size_info: str


class OrderWorkerRead(RowModel):
    worker: Optional[UserRef] = None
    payment: float


class OrderTransporterRead(RowModel):
    transporter: Optional[UserRef] = None
    payment: float


class OrderRecord(RowModel):
    """A stored order row without its children."""
    id: str
    client_id: str
    order_name: str
    venue_place: str
    description: str
    total_amount: float
    received_payment: float
    remaining_payment: float
    status: str
    order_date: datetime
    completion_date: Optional[datetime] = None
    created_by: str
    shop_name: str
    created_at: datetime
    updated_at: datetime


class OrderRead(OrderRecord):
    """An order with its client, products, workers and transporters embedded."""
    client: Optional[ClientSummary] = None
    products: List[OrderProductRead] = []
    workers: List[OrderWorkerRead] = []
    transporters: List[OrderTransporterRead] = []


class OrderCreated(BaseModel):
    message: str
    order: IdRef


class OrderStatusUpdated(BaseModel):
    message: str
    order: OrderRecord
