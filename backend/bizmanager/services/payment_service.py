"""
Business Manager Backend — Payment Service
==========================================

What:  Records money received against an order. A payment is immutable:
       creating one adds its amount to the order and the client, deleting
       one takes it back off (floored at zero, with a warning when the
       floor engages).
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.models.base import money, to_utc
from bizmanager.models.client import Client
from bizmanager.models.order import Order
from bizmanager.models.payment import Payment
from bizmanager.models.user import User
from bizmanager.schemas.payments import PaymentCreate, PaymentCreated, PaymentRead
from bizmanager.services.ledger import add_received, database_errors, lock_one, receive_from_client

logger = logging.getLogger(__name__)


class PaymentService:

    async def create_payment(self, db: AsyncSession, payload: PaymentCreate) -> PaymentCreated:
        with database_errors("Could not record the payment"):
            order = await lock_one(db, Order, payload.order_id)
            if order is None:
                raise NotFoundError(resource="Order", resource_id=payload.order_id)
            if order.client_id != payload.client_id:
                raise ValidationError(
                    "Payment client does not match the order's client", field="clientId"
                )
            client = await lock_one(db, Client, payload.client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=payload.client_id)

            amount = money(payload.amount)
            payment = Payment(
                order_id=order.id,
                client_id=client.id,
                amount=amount,
                payment_date=to_utc(payload.payment_date),
                payment_method=payload.payment_method or "cash",
                received_by=payload.received_by,
                notes=payload.notes,
                shop_name=payload.shop_name,
            )
            db.add(payment)
            add_received(order, amount)
            receive_from_client(client, amount)
            await db.flush()

        logger.info("Payment %s of %.2f recorded on order %s", payment.id, amount, order.id)
        return PaymentCreated(message="Payment recorded successfully", payment_id=payment.id)

    async def delete_payment(self, db: AsyncSession, payment_id: str) -> None:
        with database_errors("Could not delete the payment", payment_id=payment_id):
            payment = await lock_one(db, Payment, payment_id)
            if payment is None:
                raise NotFoundError(resource="Payment", resource_id=payment_id)

            amount = payment.amount
            order = await lock_one(db, Order, payment.order_id)
            if order is not None:
                add_received(order, -amount)
            client = await lock_one(db, Client, payment.client_id)
            if client is not None:
                receive_from_client(client, -amount)

            await db.delete(payment)
            await db.flush()
        logger.info("Payment %s of %.2f deleted", payment_id, amount)

    async def list_for_order(self, db: AsyncSession, order_id: str) -> List[PaymentRead]:
        query = (
            select(Payment, User.first_name, User.last_name, User.role)
            .outerjoin(User, User.id == Payment.received_by)
            .where(Payment.order_id == order_id)
            .order_by(Payment.payment_date.desc())
        )
        with database_errors("Could not retrieve payments", order_id=order_id):
            rows = (await db.execute(query)).all()
        return [
            PaymentRead(
                **_payment_fields(payment), first_name=first_name, last_name=last_name, role=role
            )
            for payment, first_name, last_name, role in rows
        ]

    async def list_for_client(self, db: AsyncSession, client_id: str) -> List[PaymentRead]:
        query = (
            select(Payment, User.first_name, User.last_name, User.role, Order.order_name, Order.order_date)
            .outerjoin(User, User.id == Payment.received_by)
            .outerjoin(Order, Order.id == Payment.order_id)
            .where(Payment.client_id == client_id)
            .order_by(Payment.payment_date.desc())
        )
        with database_errors("Could not retrieve payments", client_id=client_id):
            rows = (await db.execute(query)).all()
        return [
            PaymentRead(
                **_payment_fields(payment),
                first_name=first_name,
                last_name=last_name,
                role=role,
                order_name=order_name,
                order_date=order_date,
            )
            for payment, first_name, last_name, role, order_name, order_date in rows
        ]


def _payment_fields(payment: Payment) -> dict:
    return {
        "id": payment.id,
        "order_id": payment.order_id,
        "client_id": payment.client_id,
        "amount": payment.amount,
        "payment_date": payment.payment_date,
        "payment_method": payment.payment_method,
        "received_by": payment.received_by,
        "notes": payment.notes,
        "shop_name": payment.shop_name,
        "created_at": payment.created_at,
    }


payment_service = PaymentService()
