"""
Business Manager Backend — Product Catalog Schemas
==================================================
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from bizmanager.schemas.common import CamelModel, RowModel

ProductType = Literal["quantity", "size"]


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    type: ProductType = "quantity"


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ProductType] = None
    is_active: Optional[bool] = None


class ProductRead(RowModel):
    id: str
    name: str
    type: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ProductDeactivated(BaseModel):
    message: str
    product: ProductRead


class CatalogInitialized(BaseModel):
    message: str
    created: int
    products: List[ProductRead]
