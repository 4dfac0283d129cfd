"""
Business Manager Backend — Transportation Routes
================================================

What:  /api/transportation: list, create, status update, assign
       transporter, soft delete.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.schemas.orders import StatusUpdate
from bizmanager.schemas.transportation import (
    TransportCreate,
    TransportCreated,
    TransporterAssign,
    TransportRead,
)
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.transportation_service import transportation_service

router = APIRouter(prefix="/api/transportation", tags=["Transportation"])

_NOT_FOUND = {404: {"description": "Transportation record not found", "model": ErrorResponse}}


@router.get("/", response_model=DataResponse[List[TransportRead]])
async def list_transports(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[TransportRead]]:
    return DataResponse(data=await transportation_service.list_transports(db, actor))


@router.post(
    "/",
    response_model=TransportCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid transporter", "model": ErrorResponse}},
)
async def create_transport(
    payload: TransportCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TransportCreated:
    record = await transportation_service.create_transport(db, payload)
    return TransportCreated(message="Transportation record created successfully", transport_id=record.id)


@router.put("/{transport_id}/status", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_transport_status(
    transport_id: str,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await transportation_service.update_status(db, transport_id, payload.status)
    return MessageResponse(message="Transportation status updated")


@router.put(
    "/{transport_id}/assign",
    response_model=MessageResponse,
    responses={
        400: {"description": "Transporter not found or invalid role", "model": ErrorResponse},
        **_NOT_FOUND,
    },
)
async def assign_transporter(
    transport_id: str,
    payload: TransporterAssign,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await transportation_service.assign_transporter(db, transport_id, payload.transporter_id)
    return MessageResponse(message="Transporter assigned successfully")


@router.delete("/{transport_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_transport(
    transport_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await transportation_service.deactivate(db, transport_id)
    return MessageResponse(message="Transportation record deleted successfully")
