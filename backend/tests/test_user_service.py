"""
Business Manager Backend — User Service Tests
=============================================

What we test:
    ✅ list_users: owners see the whole shop, employees see colleagues only
    ✅ list_by_roles filters by role and optional shop
    ✅ statistics: counts, salary totals, 404 and cross-shop 403
"""

import pytest

from bizmanager.exceptions import AccessDeniedError, NotFoundError
from bizmanager.models.user import (
    EDITOR_ROLES,
    ROLE_EDITOR,
    ROLE_OWNER,
    ROLE_TRANSPORTER,
    ROLE_WORKER,
    ROLE_WORKER_EDITOR,
)
from bizmanager.services.access import Actor
from bizmanager.services.order_service import order_service
from bizmanager.services.user_service import user_service

OWNER = Actor(shop_name="Test Shop", role="owner")


class TestListUsers:

    @pytest.mark.asyncio
    async def test_owner_and_employee_views(self, db_session, owner, make_user):
        alice = await make_user(first_name="Alice")
        await make_user(first_name="Bob")
        await make_user(first_name="Stranger", shop_name="Other Shop")

        everyone = await user_service.list_users(db_session, OWNER)
        assert sorted(u.first_name for u in everyone) == ["Alice", "Bob", "Olivia"]

        colleagues = await user_service.list_users(
            db_session, Actor(shop_name="Test Shop", role="worker", user_id=alice.id)
        )
        assert sorted(u.first_name for u in colleagues) == ["Bob", "Olivia"]

    @pytest.mark.asyncio
    async def test_missing_shop_lists_nothing(self, db_session, owner):
        assert await user_service.list_users(db_session, Actor(role="owner")) == []

    @pytest.mark.asyncio
    async def test_list_by_roles(self, db_session, make_user):
        await make_user(role=ROLE_EDITOR, first_name="Eve")
        await make_user(role=ROLE_WORKER_EDITOR, first_name="Will")
        await make_user(role=ROLE_WORKER, first_name="Walt")
        await make_user(role=ROLE_TRANSPORTER, first_name="Tom")
        await make_user(role=ROLE_EDITOR, first_name="Xena", shop_name="Other Shop")

        editors = await user_service.list_by_roles(db_session, EDITOR_ROLES, "Test Shop")
        assert [u.first_name for u in editors] == ["Eve", "Will"]

        everywhere = await user_service.list_by_roles(db_session, EDITOR_ROLES)
        assert len(everywhere) == 3


class TestStatistics:

    @pytest.mark.asyncio
    async def test_counts_and_salary(self, db_session, make_user, make_client, make_order):
        client = await make_client()
        alice = await make_user(first_name="Alice", last_name="Andrews")
        done = await make_order(client, workers=[(alice, 250)])
        await make_order(client, transporters=[(alice, 50)])
        await make_order(client)
        await order_service.update_status(db_session, done.id, "completed")

        stats = await user_service.statistics(db_session, OWNER, alice.id)

        assert stats.user.name == "Alice Andrews"
        assert (stats.orders.total, stats.orders.completed, stats.orders.remaining) == (2, 1, 1)
        assert stats.projects.total == 0
        assert stats.work.total == 2
        assert stats.payments.total_earnings == 300
        assert stats.payments.remaining_salary == 300

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await user_service.statistics(db_session, OWNER, "missing")

    @pytest.mark.asyncio
    async def test_other_shop_is_denied(self, db_session, make_user):
        alice = await make_user()
        with pytest.raises(AccessDeniedError):
            await user_service.statistics(
                db_session, Actor(shop_name="Other Shop", role=ROLE_OWNER), alice.id
            )


class TestPerformance:

    @pytest.mark.asyncio
    async def test_rating_is_stored(self, db_session, make_user):
        alice = await make_user()
        await user_service.update_performance(db_session, alice.id, 87.5)
        assert alice.accuracy_rating == 87.5
