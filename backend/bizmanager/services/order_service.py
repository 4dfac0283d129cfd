"""
Business Manager Backend — Order Service
========================================

What:  The order ledger. Creating an order books its products, assigns
       workers / transporters (crediting each a salary entry) and charges
       the client; deleting it reverses all of that.
Who:   Called by routes/orders.py; `orders_assigned_to()` is shared with the
       dashboard and user statistics.

Create flow (one transaction, opened by get_db_session):
    ┌───────────────┐   ┌──────────────┐   ┌──────────────────┐   ┌──────────────┐
    │ lock client & │──▶│ insert order │──▶│ SAVEPOINT:       │──▶│ SAVEPOINT:   │
    │ assignees     │   │ + children   │   │ salary entries   │   │ client totals│
    └───────────────┘   └──────────────┘   └──────────────────┘   └──────────────┘

    A failing savepoint rolls back only its own step and is logged; the
    order itself still commits.
"""

import logging
from typing import Dict, List

from sqlalchemy import CompoundSelect, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bizmanager.exceptions import NotFoundError
from bizmanager.models.base import money, to_utc, utcnow
from bizmanager.models.client import Client
from bizmanager.models.order import (
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_PENDING,
    Order,
    OrderProduct,
    OrderTransporter,
    OrderWorker,
)
from bizmanager.models.payment import Payment
from bizmanager.models.salary import SALARY_TYPE_ORDER_WORK, SALARY_TYPE_TRANSPORT_WORK
from bizmanager.models.user import User
from bizmanager.schemas.orders import OrderCreate, OrderRead
from bizmanager.services.access import Actor
from bizmanager.services.ledger import (
    charge_client,
    database_errors,
    discharge_client,
    lock_many,
    lock_one,
    receive_from_client,
    set_received,
)
from bizmanager.services.salary_service import salary_service

logger = logging.getLogger(__name__)


def orders_assigned_to(user_id: str) -> CompoundSelect:
    """Ids of the orders `user_id` works on as a worker or transporter."""
    return (
        select(OrderWorker.order_id).where(OrderWorker.worker_id == user_id)
        .union(
            select(OrderTransporter.order_id).where(OrderTransporter.transporter_id == user_id)
        )
    )


class OrderService:

    async def create_order(self, db: AsyncSession, payload: OrderCreate) -> Order:
        """
        Books an order and propagates it to the salary and client ledgers.

        Raises:
            NotFoundError: the client or an assigned employee does not exist
            DatabaseError: inserting the order failed
        """
        products = payload.products or []
        workers = payload.workers or []
        transporters = payload.transporters or []

        with database_errors("Could not create the order"):
            client = await lock_one(db, Client, payload.client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=payload.client_id)

            assignee_ids = [w.worker for w in workers] + [t.transporter for t in transporters]
            employees: Dict[str, User] = await lock_many(db, User, assignee_ids)
            for employee_id in assignee_ids:
                if employee_id not in employees:
                    raise NotFoundError(resource="Employee", resource_id=employee_id)

            total = money(payload.total_amount)
            received = money(payload.received_payment)
            order = Order(
                client_id=client.id,
                order_name=payload.order_name,
                venue_place=payload.venue_place,
                description=payload.description,
                total_amount=total,
                received_payment=received,
                remaining_payment=money(total - received),
                status=ORDER_STATUS_PENDING,
                order_date=to_utc(payload.order_date) or utcnow(),
                created_by=payload.created_by,
                shop_name=payload.shop_name,
            )
            db.add(order)
            await db.flush()
            order_id = order.id

            for product in products:
                db.add(OrderProduct(
                    order_id=order_id,
                    name=product.name,
                    quantity=product.quantity,
                    price=money(product.price),
                    size_info=product.size_info,
                ))
            for worker in workers:
                db.add(OrderWorker(order_id=order_id, worker_id=worker.worker, payment=money(worker.payment)))
            for transporter in transporters:
                db.add(OrderTransporter(
                    order_id=order_id,
                    transporter_id=transporter.transporter,
                    payment=money(transporter.payment),
                ))
            await db.flush()

        # ── Secondary effects ─────────────────────────────────────────────
        try:
            async with db.begin_nested():
                for worker in workers:
                    salary_service.credit(
                        db, employees[worker.worker], worker.payment, SALARY_TYPE_ORDER_WORK,
                        f"Order work: {payload.order_name}",
                        work_date=order.order_date, related_order_id=order_id,
                    )
                for transporter in transporters:
                    salary_service.credit(
                        db, employees[transporter.transporter], transporter.payment,
                        SALARY_TYPE_TRANSPORT_WORK,
                        f"Transport work: {payload.order_name}",
                        work_date=order.order_date, related_order_id=order_id,
                    )
        except SQLAlchemyError:
            logger.warning("Failed to create salary entries for order %s", order_id, exc_info=True)

        try:
            async with db.begin_nested():
                charge_client(client, total, received)
        except SQLAlchemyError:
            logger.warning("Failed to update client statistics for order %s", order_id, exc_info=True)

        logger.info(
            "Order %s created for client %s: total=%.2f received=%.2f workers=%d transporters=%d",
            order_id, payload.client_id, total, received, len(workers), len(transporters),
        )
        return order

    async def list_orders(self, db: AsyncSession, actor: Actor) -> List[OrderRead]:
        """Owner: every order of the shop. Others: orders they are assigned to. Newest first."""
        if not actor.can_list:
            return []

        query = (
            select(Order)
            .where(Order.shop_name == actor.shop_name)
            .options(
                selectinload(Order.client),
                selectinload(Order.products),
                selectinload(Order.workers).selectinload(OrderWorker.worker),
                selectinload(Order.transporters).selectinload(OrderTransporter.transporter),
            )
            .order_by(Order.created_at.desc())
            .execution_options(populate_existing=True)
        )
        if not actor.is_owner:
            query = query.where(Order.id.in_(orders_assigned_to(actor.user_id)))

        with database_errors("Could not retrieve orders"):
            result = await db.execute(query)
            orders = list(result.scalars().all())
        return [OrderRead.model_validate(order) for order in orders]

    async def update_status(self, db: AsyncSession, order_id: str, status: str) -> Order:
        with database_errors("Could not update the order", order_id=order_id):
            order = await lock_one(db, Order, order_id)
            if order is None:
                raise NotFoundError(resource="Order", resource_id=order_id)
            order.status = status
            if status == ORDER_STATUS_COMPLETED:
                order.completion_date = utcnow()
            await db.flush()
        logger.info("Order %s status -> %s", order_id, status)
        return order

    async def update_payment(self, db: AsyncSession, order_id: str, received: float) -> Order:
        """Overwrites the received amount and mirrors the change into the client."""
        with database_errors("Could not update the order payment", order_id=order_id):
            order = await lock_one(db, Order, order_id)
            if order is None:
                raise NotFoundError(resource="Order", resource_id=order_id)
            delta = set_received(order, received)
            client = await lock_one(db, Client, order.client_id)
            if client is not None:
                receive_from_client(client, delta)
            await db.flush()
        logger.info("Order %s received payment set to %.2f (delta %.2f)", order_id, received, delta)
        return order

    async def delete_order(self, db: AsyncSession, order_id: str) -> None:
        """
        Reverses every effect of create_order, then deletes the order and
        its children (products, assignments, payments).
        """
        with database_errors("Could not delete the order", order_id=order_id):
            order = await lock_one(db, Order, order_id)
            if order is None:
                raise NotFoundError(resource="Order", resource_id=order_id)

            removed = await salary_service.reverse_related(db, order_id=order_id)

            client = await lock_one(db, Client, order.client_id)
            if client is not None:
                discharge_client(client, order.total_amount, order.received_payment)
            else:
                logger.warning("Order %s references missing client %s", order_id, order.client_id)

            for child in (OrderProduct, OrderWorker, OrderTransporter, Payment):
                await db.execute(delete(child).where(child.order_id == order_id))
            await db.delete(order)
            await db.flush()

        logger.info("Order %s deleted with %d salary entries", order_id, removed)


order_service = OrderService()
