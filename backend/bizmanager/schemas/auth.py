"""
Business Manager Backend — Auth & Shop Schemas
==============================================

What:  Request bodies and responses for /api/auth.

Shop creation fields are optional at the schema level so the service can
answer with the specific "Shop name is required" / "Owner email and name
are required" messages.
"""

from typing import Optional

from pydantic import BaseModel, Field

from bizmanager.models.user import ROLE_WORKER
from bizmanager.schemas.common import CamelModel, wire_field


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = ""
    email: str = Field(min_length=3)
    password: Optional[str] = None
    shop_name: Optional[str] = None
    role: str = ROLE_WORKER
    phone: str = ""
    is_creating_shop: bool = False
    old_worker_editor_id: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = ""


class AuthUser(BaseModel):
    id: str = wire_field("id", "_id")
    first_name: str = wire_field("first_name", "firstName")
    last_name: str = wire_field("last_name", "lastName")
    email: str
    role: str
    shop_name: Optional[str] = wire_field("shop_name", "shopName", default=None)
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    message: str
    user: AuthUser


class UserLookup(BaseModel):
    user: AuthUser


class ShopName(BaseModel):
    name: str


class ShopCreate(CamelModel):
    name: Optional[str] = None
    description: str = ""
    business_type: str = "mixed"
    owner_email: Optional[str] = None
    owner_name: Optional[str] = None


class ShopRead(BaseModel):
    id: str = wire_field("id", "_id")
    name: str
    description: str
    business_type: str = wire_field("business_type", "businessType")

    model_config = {"from_attributes": True}


class ShopCreated(BaseModel):
    message: str
    shop: ShopRead
