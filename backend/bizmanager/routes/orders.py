"""
Business Manager Backend — Order Routes
=======================================

What:  /api/orders: list, create, status update, payment update, delete.
How:   Thin handlers; the ledger rules live in services/order_service.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse, ErrorResponse, IdRef, MessageResponse
from bizmanager.schemas.orders import (
    OrderCreate,
    OrderCreated,
    OrderRead,
    OrderRecord,
    OrderStatusUpdated,
    ReceivedPaymentUpdate,
    StatusUpdate,
)
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.order_service import order_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])

_NOT_FOUND = {404: {"description": "Order not found", "model": ErrorResponse}}


@router.get(
    "/",
    response_model=DataResponse[List[OrderRead]],
    summary="List orders visible to the caller",
    description=(
        "Owners see every order of their shop; other roles see the orders they are "
        "assigned to as worker or transporter. Each order embeds its client, products, "
        "workers and transporters. Newest first."
    ),
)
async def list_orders(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[OrderRead]]:
    return DataResponse(data=await order_service.list_orders(db, actor))


@router.post(
    "/",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        404: {"description": "Client or assigned employee not found", "model": ErrorResponse},
    },
    summary="Create an order",
)
async def create_order(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderCreated:
    order = await order_service.create_order(db, payload)
    return OrderCreated(message="Order created successfully", order=IdRef(id=order.id))


@router.put(
    "/{order_id}/status",
    response_model=OrderStatusUpdated,
    responses=_NOT_FOUND,
    summary="Update order status",
)
async def update_order_status(
    order_id: str,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderStatusUpdated:
    order = await order_service.update_status(db, order_id, payload.status)
    return OrderStatusUpdated(message="Order status updated", order=OrderRecord.model_validate(order))


@router.put(
    "/{order_id}/payment",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Overwrite the received payment of an order",
)
async def update_order_payment(
    order_id: str,
    payload: ReceivedPaymentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await order_service.update_payment(db, order_id, payload.received_payment)
    return MessageResponse(message="Payment updated")


@router.delete(
    "/{order_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete an order and reverse its ledger effects",
)
async def delete_order(
    order_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await order_service.delete_order(db, order_id)
    return MessageResponse(message="Order and related data deleted successfully")
