"""
Business Manager Backend — Editing Project Service
==================================================

What:  The editing-project ledger: same shape as the order ledger, with a
       single editor paid a commission instead of per-assignee payments.

Commission:
    commission_amount = editing_value * commission_percentage / 100,
    rounded half-up to whole currency units, computed once at creation.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import NotFoundError
from bizmanager.models.base import money, to_utc, utcnow
from bizmanager.models.client import Client
from bizmanager.models.editing import (
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_IN_PROGRESS,
    EditingProject,
)
from bizmanager.models.salary import SALARY_TYPE_EDITING_WORK
from bizmanager.models.user import User
from bizmanager.schemas.editing import ProjectCreate, ProjectRead
from bizmanager.services.access import Actor
from bizmanager.services.ledger import (
    charge_client,
    database_errors,
    discharge_client,
    lock_one,
    receive_from_client,
    set_received,
)
from bizmanager.services.salary_service import salary_service

logger = logging.getLogger(__name__)


def commission_for(editing_value: float, percentage: float) -> float:
    raw = Decimal(str(editing_value)) * Decimal(str(percentage)) / Decimal(100)
    return float(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class EditingService:

    async def create_project(self, db: AsyncSession, payload: ProjectCreate) -> EditingProject:
        with database_errors("Could not create the editing project"):
            client = await lock_one(db, Client, payload.client_id)
            if client is None:
                raise NotFoundError(resource="Client", resource_id=payload.client_id)
            editor = await lock_one(db, User, payload.editor_id)
            if editor is None:
                raise NotFoundError(resource="Editor", resource_id=payload.editor_id)

            total = money(payload.total_amount)
            received = money(payload.received_payment)
            commission = commission_for(payload.editing_value, payload.commission_percentage)
            project = EditingProject(
                client_id=client.id,
                editor_id=editor.id,
                project_name=payload.project_name,
                description=payload.description,
                editing_value=money(payload.editing_value),
                pendrive_included=payload.pendrive_included,
                pendrive_value=money(payload.pendrive_value),
                total_amount=total,
                received_payment=received,
                remaining_payment=money(total - received),
                commission_percentage=payload.commission_percentage,
                commission_amount=commission,
                start_date=to_utc(payload.start_date) or utcnow(),
                end_date=to_utc(payload.end_date),
                status=PROJECT_STATUS_IN_PROGRESS,
                created_by=payload.created_by,
                shop_name=payload.shop_name,
            )
            db.add(project)
            await db.flush()
            project_id = project.id

        try:
            async with db.begin_nested():
                salary_service.credit(
                    db, editor, commission, SALARY_TYPE_EDITING_WORK,
                    f"Editing project: {payload.project_name}",
                    work_date=project.start_date, related_project_id=project_id,
                )
        except SQLAlchemyError:
            logger.warning("Failed to create salary entry for project %s", project_id, exc_info=True)

        try:
            async with db.begin_nested():
                charge_client(client, total, received, project=True)
        except SQLAlchemyError:
            logger.warning("Failed to update client statistics for project %s", project_id, exc_info=True)

        logger.info(
            "Editing project %s created: total=%.2f commission=%.2f editor=%s",
            project_id, total, commission, editor.id,
        )
        return project

    async def list_projects(self, db: AsyncSession, actor: Actor) -> List[ProjectRead]:
        if not actor.can_list:
            return []
        query = (
            select(EditingProject)
            .where(EditingProject.shop_name == actor.shop_name)
            .order_by(EditingProject.created_at.desc())
        )
        if not actor.is_owner:
            query = query.where(EditingProject.editor_id == actor.user_id)

        with database_errors("Could not retrieve editing projects"):
            result = await db.execute(query)
            projects = list(result.scalars().all())
        return [ProjectRead.model_validate(p) for p in projects]

    async def update_status(self, db: AsyncSession, project_id: str, status: str) -> EditingProject:
        with database_errors("Could not update the editing project", project_id=project_id):
            project = await lock_one(db, EditingProject, project_id)
            if project is None:
                raise NotFoundError(resource="Project", resource_id=project_id)
            project.status = status
            if status == PROJECT_STATUS_COMPLETED:
                project.completion_date = utcnow()
            await db.flush()
        return project

    async def update_payment(self, db: AsyncSession, project_id: str, received: float) -> EditingProject:
        with database_errors("Could not update the project payment", project_id=project_id):
            project = await lock_one(db, EditingProject, project_id)
            if project is None:
                raise NotFoundError(resource="Project", resource_id=project_id)
            delta = set_received(project, received)
            client = await lock_one(db, Client, project.client_id)
            if client is not None:
                receive_from_client(client, delta)
            await db.flush()
        return project

    async def delete_project(self, db: AsyncSession, project_id: str) -> None:
        with database_errors("Could not delete the editing project", project_id=project_id):
            project = await lock_one(db, EditingProject, project_id)
            if project is None:
                raise NotFoundError(resource="Project", resource_id=project_id)

            removed = await salary_service.reverse_related(db, project_id=project_id)

            client = await lock_one(db, Client, project.client_id)
            if client is not None:
                discharge_client(
                    client, project.total_amount, project.received_payment, project=True
                )
            await db.delete(project)
            await db.flush()

        logger.info("Editing project %s deleted with %d salary entries", project_id, removed)


editing_service = EditingService()
