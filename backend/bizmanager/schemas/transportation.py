"""
Business Manager Backend — Transportation Schemas
=================================================
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bizmanager.schemas.common import CamelModel, RowModel


class TransportCreate(CamelModel):
    pickup_location: str = Field(min_length=1)
    delivery_location: str = Field(min_length=1)
    shop_name: str = Field(min_length=1)
    created_by: str = Field(min_length=1)
    related_order: Optional[str] = None
    related_project: Optional[str] = None
    client_id: Optional[str] = None
    transporter_id: Optional[str] = None
    distance: float = Field(default=0, ge=0)
    transport_fee: float = Field(default=0, ge=0)
    equipment_list: str = ""
    transport_date: Optional[datetime] = None
    instructions: str = ""


class TransporterAssign(CamelModel):
    transporter_id: str = Field(min_length=1)


class TransportRead(RowModel):
    id: str
    related_order_id: Optional[str] = None
    related_project_id: Optional[str] = None
    client_id: Optional[str] = None
    transporter_id: Optional[str] = None
    pickup_location: str
    delivery_location: str
    distance: float
    transport_fee: float
    equipment_list: str
    transport_date: datetime
    instructions: str
    status: str
    completed_date: Optional[datetime] = None
    shop_name: str
    created_by: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TransportCreated(CamelModel):
    message: str
    transport_id: str
