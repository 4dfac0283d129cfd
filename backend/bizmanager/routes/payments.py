"""
Business Manager Backend — Payment Routes
=========================================

What:  /api/payments: record, delete, list by order, list by client.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.schemas.payments import PaymentCreate, PaymentCreated, PaymentRead
from bizmanager.services.payment_service import payment_service

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.get("/order/{order_id}", response_model=DataResponse[List[PaymentRead]])
async def list_order_payments(
    order_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[PaymentRead]]:
    return DataResponse(data=await payment_service.list_for_order(db, order_id))


@router.get("/client/{client_id}", response_model=DataResponse[List[PaymentRead]])
async def list_client_payments(
    client_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[PaymentRead]]:
    return DataResponse(data=await payment_service.list_for_client(db, client_id))


@router.post(
    "/",
    response_model=PaymentCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields or client / order mismatch", "model": ErrorResponse},
        404: {"description": "Order or client not found", "model": ErrorResponse},
    },
    summary="Record a payment against an order",
)
async def create_payment(
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PaymentCreated:
    return await payment_service.create_payment(db, payload)


@router.delete(
    "/{payment_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Payment not found", "model": ErrorResponse}},
)
async def delete_payment(
    payment_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await payment_service.delete_payment(db, payment_id)
    return MessageResponse(message="Payment deleted successfully")
