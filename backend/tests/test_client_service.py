"""
Business Manager Backend — Client Service Tests
===============================================

What we test:
    ✅ Only owners list clients, scoped to their shop
    ✅ update_client touches only the fields that were sent
    ✅ Work history merges orders and projects, newest first
"""

from datetime import timedelta

import pytest

from bizmanager.exceptions import NotFoundError
from bizmanager.models.base import utcnow
from bizmanager.models.user import ROLE_EDITOR
from bizmanager.schemas.clients import ClientCreate, ClientUpdate
from bizmanager.schemas.editing import ProjectCreate
from bizmanager.services.access import Actor
from bizmanager.services.client_service import client_service
from bizmanager.services.editing_service import editing_service


class TestClientCrud:

    @pytest.mark.asyncio
    async def test_create_starts_with_zero_totals(self, db_session):
        client = await client_service.create_client(
            db_session, ClientCreate(name="Mehta Events", shop_name="Test Shop", phone="98200")
        )
        assert client.id
        assert client.pending_payments == 0
        assert client.lifetime_orders == 0

    @pytest.mark.asyncio
    async def test_list_is_owner_only(self, db_session, make_client):
        await make_client(name="Ours")
        await make_client(name="Theirs", shop_name="Other Shop")

        owner_view = await client_service.list_clients(db_session, Actor(shop_name="Test Shop", role="owner"))
        assert [c.name for c in owner_view] == ["Ours"]

        worker_view = await client_service.list_clients(
            db_session, Actor(shop_name="Test Shop", role="worker", user_id="w1")
        )
        assert worker_view == []

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, make_client):
        client = await make_client(name="Old Name")
        client.email = "keep@example.com"

        await client_service.update_client(db_session, client.id, ClientUpdate(phone="12345"))

        assert client.name == "Old Name"
        assert client.email == "keep@example.com"
        assert client.phone == "12345"

    @pytest.mark.asyncio
    async def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError, match="Client not found"):
            await client_service.delete_client(db_session, "missing")


class TestWorkHistory:

    @pytest.mark.asyncio
    async def test_orders_and_projects_newest_first(self, db_session, make_user, make_client, make_order):
        client = await make_client()
        editor = await make_user(role=ROLE_EDITOR)
        now = utcnow()
        await make_order(client, total=800, received=800, order_name="Old Paid", order_date=now - timedelta(days=10))
        await make_order(client, total=500, order_name="Recent", order_date=now - timedelta(days=1))
        await editing_service.create_project(db_session, ProjectCreate(
            client_id=client.id, editor_id=editor.id, project_name="Middle Edit",
            editing_value=1000, total_amount=1000, commission_percentage=10,
            start_date=now - timedelta(days=5), end_date=now + timedelta(days=2),
            shop_name="Test Shop", created_by="owner-1",
        ))

        history = await client_service.work_history(db_session, client.id)

        assert [item.name for item in history.work_history] == ["Recent", "Middle Edit", "Old Paid"]
        assert [item.type for item in history.work_history] == ["order", "project", "order"]
        assert [item.is_paid for item in history.work_history] == [False, False, True]
        assert history.client.total_payments_due == 2300
        assert history.client.pending_payments == 1500

    @pytest.mark.asyncio
    async def test_unknown_client(self, db_session):
        with pytest.raises(NotFoundError):
            await client_service.work_history(db_session, "missing")
