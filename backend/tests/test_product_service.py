"""
Business Manager Backend — Product Catalog Tests
================================================
"""

import pytest

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.schemas.products import ProductCreate, ProductUpdate
from bizmanager.services.product_service import DEFAULT_CATALOG, product_service


class TestCatalog:

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, db_session):
        first = await product_service.initialize_defaults(db_session)
        second = await product_service.initialize_defaults(db_session)

        assert len(first) == len(DEFAULT_CATALOG) == 8
        assert second == []
        assert len(await product_service.list_active(db_session)) == 8

    @pytest.mark.asyncio
    async def test_initialize_skips_existing_names(self, db_session):
        await product_service.create_product(db_session, ProductCreate(name="Drone"))
        created = await product_service.initialize_defaults(db_session)
        assert "Drone" not in [p.name for p in created]
        assert len(created) == 7

    @pytest.mark.asyncio
    async def test_duplicate_name(self, db_session):
        await product_service.create_product(db_session, ProductCreate(name="Smoke Machine"))
        with pytest.raises(ValidationError, match="Product already exists"):
            await product_service.create_product(db_session, ProductCreate(name=" Smoke Machine "))

    @pytest.mark.asyncio
    async def test_deactivated_products_are_hidden(self, db_session):
        product = await product_service.create_product(
            db_session, ProductCreate(name="LED Wall", type="size")
        )
        await product_service.deactivate_product(db_session, product.id)

        assert product.is_active is False
        assert await product_service.list_active(db_session) == []

    @pytest.mark.asyncio
    async def test_rename_onto_existing_name(self, db_session):
        await product_service.create_product(db_session, ProductCreate(name="Camera"))
        other = await product_service.create_product(db_session, ProductCreate(name="Mixer"))

        with pytest.raises(ValidationError):
            await product_service.update_product(db_session, other.id, ProductUpdate(name="Camera"))

        updated = await product_service.update_product(db_session, other.id, ProductUpdate(type="size"))
        assert updated.type == "size"
        assert updated.name == "Mixer"

    @pytest.mark.asyncio
    async def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError, match="Product not found"):
            await product_service.update_product(db_session, "missing", ProductUpdate(is_active=True))
