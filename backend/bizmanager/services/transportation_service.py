"""
Business Manager Backend — Transportation Service
=================================================

What:  Equipment moves between pickup and delivery locations, optionally
       tied to an order or project and assigned to a transporter.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.models.base import money, to_utc, utcnow
from bizmanager.models.transportation import (
    TRANSPORT_STATUS_DELIVERED,
    TRANSPORT_STATUS_PENDING,
    Transportation,
)
from bizmanager.models.user import TRANSPORTER_ROLES, User
from bizmanager.schemas.transportation import TransportCreate, TransportRead
from bizmanager.services.access import Actor, clean_identifier
from bizmanager.services.ledger import database_errors, lock_one

logger = logging.getLogger(__name__)


class TransportationService:

    async def list_transports(self, db: AsyncSession, actor: Actor) -> List[TransportRead]:
        if not actor.can_list:
            return []
        query = (
            select(Transportation)
            .where(
                Transportation.shop_name == actor.shop_name,
                Transportation.is_active.is_(True),
            )
            .order_by(Transportation.created_at.desc())
        )
        if not actor.is_owner:
            query = query.where(Transportation.transporter_id == actor.user_id)

        with database_errors("Could not retrieve transportation records"):
            records = (await db.execute(query)).scalars().all()
        return [TransportRead.model_validate(r) for r in records]

    async def create_transport(self, db: AsyncSession, payload: TransportCreate) -> Transportation:
        with database_errors("Could not create the transportation record"):
            transporter_id = clean_identifier(payload.transporter_id)
            if transporter_id is not None:
                await self._require_transporter(db, transporter_id)
            record = Transportation(
                related_order_id=clean_identifier(payload.related_order),
                related_project_id=clean_identifier(payload.related_project),
                client_id=clean_identifier(payload.client_id),
                transporter_id=transporter_id,
                pickup_location=payload.pickup_location,
                delivery_location=payload.delivery_location,
                distance=payload.distance,
                transport_fee=money(payload.transport_fee),
                equipment_list=payload.equipment_list,
                transport_date=to_utc(payload.transport_date) or utcnow(),
                instructions=payload.instructions,
                status=TRANSPORT_STATUS_PENDING,
                shop_name=payload.shop_name,
                created_by=payload.created_by,
                is_active=True,
            )
            db.add(record)
            await db.flush()
        logger.info("Transportation %s created (%s -> %s)", record.id, record.pickup_location, record.delivery_location)
        return record

    async def _get_active(self, db: AsyncSession, transport_id: str) -> Transportation:
        record: Optional[Transportation] = await lock_one(db, Transportation, transport_id)
        if record is None or not record.is_active:
            raise NotFoundError(resource="Transportation record", resource_id=transport_id)
        return record

    async def _require_transporter(self, db: AsyncSession, user_id: str) -> User:
        user = await db.get(User, user_id)
        if user is None or user.role not in TRANSPORTER_ROLES:
            raise ValidationError("Transporter not found or invalid role", field="transporterId")
        return user

    async def update_status(self, db: AsyncSession, transport_id: str, status: str) -> Transportation:
        with database_errors("Could not update the transportation status", transport_id=transport_id):
            record = await self._get_active(db, transport_id)
            record.status = status
            if status == TRANSPORT_STATUS_DELIVERED:
                record.completed_date = utcnow()
            await db.flush()
        return record

    async def assign_transporter(self, db: AsyncSession, transport_id: str, transporter_id: str) -> Transportation:
        with database_errors("Could not assign the transporter", transport_id=transport_id):
            await self._require_transporter(db, transporter_id)
            record = await self._get_active(db, transport_id)
            record.transporter_id = transporter_id
            await db.flush()
        logger.info("Transportation %s assigned to %s", transport_id, transporter_id)
        return record

    async def deactivate(self, db: AsyncSession, transport_id: str) -> None:
        with database_errors("Could not delete the transportation record", transport_id=transport_id):
            record = await self._get_active(db, transport_id)
            record.is_active = False
            await db.flush()


transportation_service = TransportationService()
