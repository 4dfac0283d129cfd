"""
Business Manager Backend — Product Catalog Model
================================================

What:  ORM model for the `products` table. Deletion is soft (`is_active`).
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, TimestampMixin

PRODUCT_TYPE_QUANTITY = "quantity"
PRODUCT_TYPE_SIZE = "size"


class Product(IdMixin, TimestampMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default=PRODUCT_TYPE_QUANTITY)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', active={self.is_active})>"
