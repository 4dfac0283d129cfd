"""
Business Manager Backend — Client Service
=========================================

What:  Client CRUD and the merged order / project work history.
Who:   Called by routes/clients.py.

Client running totals are owned by the order, editing and payment
services; nothing here writes them.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import NotFoundError
from bizmanager.models.base import to_utc
from bizmanager.models.client import Client
from bizmanager.models.editing import EditingProject
from bizmanager.models.order import Order
from bizmanager.schemas.clients import (
    ClientBalance,
    ClientCreate,
    ClientRead,
    ClientUpdate,
    WorkHistoryItem,
    WorkHistoryResponse,
)
from bizmanager.services.access import Actor
from bizmanager.services.ledger import database_errors, lock_one

logger = logging.getLogger(__name__)


class ClientService:

    async def list_clients(self, db: AsyncSession, actor: Actor) -> List[ClientRead]:
        """Only owners list clients; everyone else gets an empty list."""
        if not (actor.is_scoped and actor.is_owner):
            return []
        with database_errors("Could not retrieve clients"):
            result = await db.execute(
                select(Client)
                .where(Client.shop_name == actor.shop_name)
                .order_by(Client.created_at.desc())
            )
            clients = list(result.scalars().all())
        return [ClientRead.model_validate(c) for c in clients]

    async def create_client(self, db: AsyncSession, payload: ClientCreate) -> Client:
        with database_errors("Could not create the client"):
            client = Client(**payload.model_dump())
            db.add(client)
            await db.flush()
        logger.info("Client %s created in shop %s", client.id, client.shop_name)
        return client

    async def update_client(self, db: AsyncSession, client_id: str, payload: ClientUpdate) -> Client:
        with database_errors("Could not update the client", client_id=client_id):
            client = await lock_one(db, Client, client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=client_id)
            for field, value in payload.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(client, field, value)
            await db.flush()
        return client

    async def delete_client(self, db: AsyncSession, client_id: str) -> None:
        with database_errors("Could not delete the client", client_id=client_id):
            client = await lock_one(db, Client, client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=client_id)
            await db.delete(client)
            await db.flush()
        logger.info("Client %s deleted", client_id)

    async def work_history(self, db: AsyncSession, client_id: str) -> WorkHistoryResponse:
        """Orders and projects of one client, newest first, each flagged paid / unpaid."""
        with database_errors("Could not retrieve the work history", client_id=client_id):
            client = await db.get(Client, client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=client_id)
            orders = (await db.execute(select(Order).where(Order.client_id == client_id))).scalars().all()
            projects = (
                await db.execute(select(EditingProject).where(EditingProject.client_id == client_id))
            ).scalars().all()

        history = [
            WorkHistoryItem(
                id=o.id,
                type="order",
                name=o.order_name,
                total_amount=o.total_amount,
                received_payment=o.received_payment,
                remaining_payment=o.remaining_payment,
                status=o.status,
                date=to_utc(o.order_date),
                is_paid=o.received_payment >= o.total_amount,
            )
            for o in orders
        ]
        history += [
            WorkHistoryItem(
                id=p.id,
                type="project",
                name=p.project_name,
                total_amount=p.total_amount,
                received_payment=p.received_payment,
                remaining_payment=p.remaining_payment,
                status=p.status,
                date=to_utc(p.start_date),
                is_paid=p.received_payment >= p.total_amount,
            )
            for p in projects
        ]
        history.sort(key=lambda item: item.date, reverse=True)

        return WorkHistoryResponse(
            client=ClientBalance(
                id=client.id,
                name=client.name,
                total_payments_due=client.total_payments_due,
                received_payments=client.received_payments,
                pending_payments=client.pending_payments,
            ),
            work_history=history,
        )


client_service = ClientService()
