"""
Business Manager Backend — Order Models
=======================================

What:  ORM models for `orders` and their child tables `order_products`,
       `order_workers` and `order_transporters`.

Order ledger fields:
    total_amount       agreed price, fixed at creation
    received_payment   money received so far
    remaining_payment  total_amount - received_payment

Child rows reference the order by `order_id` only; no database-level foreign
keys are declared, so the order service deletes children explicitly.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizmanager.database import Base
from bizmanager.models.base import IdMixin, Money, TimestampMixin, new_id
from bizmanager.models.client import Client
from bizmanager.models.user import User

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_IN_PROGRESS = "in_progress"
ORDER_STATUS_COMPLETED = "completed"


class Order(IdMixin, TimestampMixin, Base):
    """
    A booked job for a client.

    Status is free text; `completed` is the only value with a side effect
    (it stamps `completion_date`).
    """

    __tablename__ = "orders"

    client_id: Mapped[str] = mapped_column(String(36), nullable=False)
    order_name: Mapped[str] = mapped_column(String(255), nullable=False)
    venue_place: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    total_amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    received_payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    remaining_payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    status: Mapped[str] = mapped_column(String(50), nullable=False, default=ORDER_STATUS_PENDING)
    order_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completion_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)

    client: Mapped[Optional[Client]] = relationship(
        Client,
        primaryjoin="foreign(Order.client_id) == Client.id",
        viewonly=True,
        lazy="raise",
    )
    products: Mapped[List["OrderProduct"]] = relationship(
        "OrderProduct",
        primaryjoin="Order.id == foreign(OrderProduct.order_id)",
        viewonly=True,
        lazy="raise",
    )
    workers: Mapped[List["OrderWorker"]] = relationship(
        "OrderWorker",
        primaryjoin="Order.id == foreign(OrderWorker.order_id)",
        viewonly=True,
        lazy="raise",
    )
    transporters: Mapped[List["OrderTransporter"]] = relationship(
        "OrderTransporter",
        primaryjoin="Order.id == foreign(OrderTransporter.order_id)",
        viewonly=True,
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_orders_shop_name", "shop_name"),
        Index("idx_orders_client_id", "client_id"),
        Index("idx_orders_order_date", "order_date"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, name='{self.order_name}', status='{self.status}')>"


class OrderProduct(Base):
    __tablename__ = "order_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    price: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    size_info: Mapped[str] = mapped_column(String(255), nullable=False, default="")


class OrderWorker(Base):
    __tablename__ = "order_workers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    worker_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    worker: Mapped[Optional[User]] = relationship(
        User,
        primaryjoin="foreign(OrderWorker.worker_id) == User.id",
        viewonly=True,
        lazy="raise",
    )


class OrderTransporter(Base):
    __tablename__ = "order_transporters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    transporter_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    payment: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    transporter: Mapped[Optional[User]] = relationship(
        User,
        primaryjoin="foreign(OrderTransporter.transporter_id) == User.id",
        viewonly=True,
        lazy="raise",
    )
