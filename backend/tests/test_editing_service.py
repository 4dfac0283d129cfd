"""
Business Manager Backend — Editing Project Service Tests
========================================================

What we test:
    ✅ commission_for rounds half-up to whole units
    ✅ create_project credits the editor and charges the client
    ✅ delete_project reverses both
    ✅ status `completed` stamps completion_date; unknown project → 404
    ✅ list_projects: owner sees the shop, editors only their own
    ✅ a failing client update is logged; project and commission still land
"""

import logging
from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from bizmanager.exceptions import NotFoundError
from bizmanager.models.base import utcnow
from bizmanager.models.salary import SALARY_TYPE_EDITING_WORK, Salary
from bizmanager.models.user import ROLE_EDITOR
from bizmanager.schemas.editing import ProjectCreate
from bizmanager.services.access import Actor
from bizmanager.services.editing_service import commission_for, editing_service


def _payload(client, editor, **overrides) -> ProjectCreate:
    fields = dict(
        client_id=client.id,
        editor_id=editor.id,
        project_name="Highlight Reel",
        editing_value=12345,
        total_amount=15000,
        commission_percentage=10,
        end_date=utcnow() + timedelta(days=7),
        shop_name=client.shop_name,
        created_by="owner-1",
    )
    fields.update(overrides)
    return ProjectCreate(**fields)


class TestCommission:

    @pytest.mark.parametrize(
        "value, percentage, expected",
        [
            (12345, 10, 1235),    # 1234.5 rounds up
            (1000, 12.5, 125),
            (999, 33.3, 333),     # 332.667
            (50, 1, 1),           # 0.5 rounds up
            (10000, 100, 10000),
        ],
    )
    def test_round_half_up(self, value, percentage, expected):
        assert commission_for(value, percentage) == expected


class TestProjectLedger:

    @pytest.mark.asyncio
    async def test_create_and_delete(self, db_session, make_user, make_client):
        client = await make_client()
        editor = await make_user(role=ROLE_EDITOR)

        project = await editing_service.create_project(
            db_session, _payload(client, editor, received_payment=5000)
        )

        assert project.commission_amount == 1235
        assert project.remaining_payment == 10000
        assert project.status == "in_progress"

        assert editor.total_earnings == 1235
        assert editor.remaining_salary == 1235
        assert client.total_payments_due == 15000
        assert client.received_payments == 5000
        assert client.pending_payments == 10000
        assert client.lifetime_editing_projects == 1
        assert client.lifetime_orders == 0

        entry = (await db_session.execute(
            select(Salary).where(Salary.related_project_id == project.id)
        )).scalar_one()
        assert entry.salary_type == SALARY_TYPE_EDITING_WORK
        assert entry.amount == 1235

        await editing_service.delete_project(db_session, project.id)

        assert (editor.total_earnings, editor.remaining_salary) == (0, 0)
        assert (client.total_payments_due, client.received_payments, client.pending_payments) == (0, 0, 0)
        assert client.lifetime_editing_projects == 0

    @pytest.mark.asyncio
    async def test_missing_editor(self, db_session, make_client):
        client = await make_client()

        class Ghost:
            id = "ghost"

        with pytest.raises(NotFoundError, match="Editor not found"):
            await editing_service.create_project(db_session, _payload(client, Ghost()))

    @pytest.mark.asyncio
    async def test_payment_update_mirrors_delta(self, db_session, make_user, make_client):
        client = await make_client()
        editor = await make_user(role=ROLE_EDITOR)
        project = await editing_service.create_project(db_session, _payload(client, editor))

        await editing_service.update_payment(db_session, project.id, 4000)
        assert project.remaining_payment == 11000
        assert client.received_payments == 4000
        assert client.pending_payments == 11000


class TestProjectStatus:

    @pytest.mark.asyncio
    async def test_completed(self, db_session, make_user, make_client):
        client = await make_client()
        editor = await make_user(role=ROLE_EDITOR)
        project = await editing_service.create_project(db_session, _payload(client, editor))

        await editing_service.update_status(db_session, project.id, "completed")
        assert project.completion_date is not None

    @pytest.mark.asyncio
    async def test_missing_project(self, db_session):
        with pytest.raises(NotFoundError, match="Project not found"):
            await editing_service.update_status(db_session, "missing", "completed")


class TestListProjects:

    @pytest.mark.asyncio
    async def test_owner_and_editor_views(self, db_session, make_user, make_client):
        client = await make_client()
        ed1 = await make_user(role=ROLE_EDITOR)
        ed2 = await make_user(role=ROLE_EDITOR)
        mine = await editing_service.create_project(db_session, _payload(client, ed1, project_name="Mine"))
        await editing_service.create_project(db_session, _payload(client, ed2, project_name="Theirs"))

        owner_view = await editing_service.list_projects(
            db_session, Actor(shop_name="Test Shop", role="owner")
        )
        assert len(owner_view) == 2

        editor_view = await editing_service.list_projects(
            db_session, Actor(shop_name="Test Shop", role="editor", user_id=ed1.id)
        )
        assert [p.id for p in editor_view] == [mine.id]

        assert await editing_service.list_projects(db_session, Actor()) == []


class TestSecondaryEffects:

    @pytest.mark.asyncio
    async def test_client_failure_keeps_project(self, db_session, make_user, make_client, monkeypatch, caplog):
        client = await make_client()
        editor = await make_user(role=ROLE_EDITOR)

        def broken_charge(*args, **kwargs):
            raise OperationalError("UPDATE clients", {}, Exception("database is locked"))

        monkeypatch.setattr("bizmanager.services.editing_service.charge_client", broken_charge)
        with caplog.at_level(logging.WARNING, logger="bizmanager.services.editing_service"):
            project = await editing_service.create_project(db_session, _payload(client, editor))

        assert "Failed to update client statistics" in caplog.text
        assert project.id

        await db_session.refresh(client)
        assert (client.total_payments_due, client.pending_payments) == (0, 0)
        assert client.lifetime_editing_projects == 0

        await db_session.refresh(editor)
        assert editor.total_earnings == 1235
        entries = (await db_session.execute(
            select(Salary).where(Salary.related_project_id == project.id)
        )).scalars().all()
        assert len(entries) == 1
