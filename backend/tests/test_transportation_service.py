"""
Business Manager Backend — Transportation Service Tests
=======================================================

What we test:
    ✅ Only transporter roles can be assigned
    ✅ `delivered` stamps completed_date
    ✅ Soft-deleted records vanish from listings and further updates
    ✅ Non-owners see only the moves assigned to them
"""

import pytest

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.models.user import ROLE_TRANSPORTER, ROLE_TRANSPORTER_WORKER, ROLE_WORKER
from bizmanager.schemas.transportation import TransportCreate
from bizmanager.services.access import Actor
from bizmanager.services.transportation_service import transportation_service

OWNER = Actor(shop_name="Test Shop", role="owner")


def _move(**overrides) -> TransportCreate:
    fields = dict(
        pickup_location="Warehouse",
        delivery_location="Grand Hall",
        shop_name="Test Shop",
        created_by="owner-1",
        transport_fee=750,
    )
    fields.update(overrides)
    return TransportCreate(**fields)


class TestTransportation:

    @pytest.mark.asyncio
    async def test_create_with_placeholder_ids(self, db_session):
        record = await transportation_service.create_transport(
            db_session, _move(related_order="undefined", transporter_id="")
        )
        assert record.related_order_id is None
        assert record.transporter_id is None
        assert record.status == "pending"

    @pytest.mark.asyncio
    async def test_assign_requires_transporter_role(self, db_session, make_user):
        record = await transportation_service.create_transport(db_session, _move())
        worker = await make_user(role=ROLE_WORKER)
        driver = await make_user(role=ROLE_TRANSPORTER_WORKER)

        with pytest.raises(ValidationError, match="Transporter not found or invalid role"):
            await transportation_service.assign_transporter(db_session, record.id, worker.id)

        await transportation_service.assign_transporter(db_session, record.id, driver.id)
        assert record.transporter_id == driver.id

    @pytest.mark.asyncio
    async def test_delivered_stamps_completion(self, db_session):
        record = await transportation_service.create_transport(db_session, _move())
        await transportation_service.update_status(db_session, record.id, "in_transit")
        assert record.completed_date is None

        await transportation_service.update_status(db_session, record.id, "delivered")
        assert record.completed_date is not None

    @pytest.mark.asyncio
    async def test_soft_delete(self, db_session):
        record = await transportation_service.create_transport(db_session, _move())
        await transportation_service.deactivate(db_session, record.id)

        assert await transportation_service.list_transports(db_session, OWNER) == []
        with pytest.raises(NotFoundError):
            await transportation_service.update_status(db_session, record.id, "delivered")
        with pytest.raises(NotFoundError):
            await transportation_service.deactivate(db_session, record.id)

    @pytest.mark.asyncio
    async def test_listing_scope(self, db_session, make_user):
        driver = await make_user(role=ROLE_TRANSPORTER)
        mine = await transportation_service.create_transport(db_session, _move(transporter_id=driver.id))
        await transportation_service.create_transport(db_session, _move())
        await transportation_service.create_transport(db_session, _move(shop_name="Other Shop"))

        assert len(await transportation_service.list_transports(db_session, OWNER)) == 2

        driver_view = await transportation_service.list_transports(
            db_session, Actor(shop_name="Test Shop", role="transporter", user_id=driver.id)
        )
        assert [r.id for r in driver_view] == [mine.id]
