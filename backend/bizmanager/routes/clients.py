"""
Business Manager Backend — Client Routes
========================================

What:  /api/clients: list, create, update, delete, work history.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.clients import (
    ClientCreate,
    ClientRead,
    ClientSaved,
    ClientUpdate,
    WorkHistoryResponse,
)
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.client_service import client_service

router = APIRouter(prefix="/api/clients", tags=["Clients"])

_NOT_FOUND = {404: {"description": "Client not found", "model": ErrorResponse}}


@router.get(
    "/",
    response_model=DataResponse[List[ClientRead]],
    summary="List the shop's clients (owners only)",
)
async def list_clients(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[ClientRead]]:
    return DataResponse(data=await client_service.list_clients(db, actor))


@router.post("/", response_model=ClientSaved, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ClientSaved:
    client = await client_service.create_client(db, payload)
    return ClientSaved(message="Client created successfully", client=ClientRead.model_validate(client))


@router.put("/{client_id}", response_model=ClientSaved, responses=_NOT_FOUND)
async def update_client(
    client_id: str,
    payload: ClientUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ClientSaved:
    client = await client_service.update_client(db, client_id, payload)
    return ClientSaved(message="Client updated successfully", client=ClientRead.model_validate(client))


@router.delete("/{client_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_client(
    client_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await client_service.delete_client(db, client_id)
    return MessageResponse(message="Client deleted successfully")


@router.get(
    "/{client_id}/work-history",
    response_model=WorkHistoryResponse,
    responses=_NOT_FOUND,
    summary="Orders and editing projects of a client, newest first",
)
async def client_work_history(
    client_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> WorkHistoryResponse:
    return await client_service.work_history(db, client_id)
