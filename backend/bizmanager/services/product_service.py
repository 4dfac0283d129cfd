"""
Business Manager Backend — Product Catalog Service
==================================================

What:  The equipment / service catalog orders pick products from.
       Names are unique; deletion only deactivates.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.models.catalog import PRODUCT_TYPE_QUANTITY, PRODUCT_TYPE_SIZE, Product
from bizmanager.schemas.products import ProductCreate, ProductUpdate
from bizmanager.services.ledger import database_errors, lock_one

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = (
    ("LED", PRODUCT_TYPE_SIZE),
    ("Mixer", PRODUCT_TYPE_QUANTITY),
    ("Plasma", PRODUCT_TYPE_QUANTITY),
    ("Drone", PRODUCT_TYPE_QUANTITY),
    ("Camera", PRODUCT_TYPE_QUANTITY),
    ("LED Flooring", PRODUCT_TYPE_SIZE),
    ("Wireless", PRODUCT_TYPE_QUANTITY),
    ("Youtube Live", PRODUCT_TYPE_QUANTITY),
)


class ProductService:

    async def _by_name(self, db: AsyncSession, name: str) -> Optional[Product]:
        result = await db.execute(select(Product).where(Product.name == name))
        return result.scalar_one_or_none()

    async def list_active(self, db: AsyncSession) -> List[Product]:
        with database_errors("Could not retrieve products"):
            result = await db.execute(
                select(Product).where(Product.is_active.is_(True)).order_by(Product.name)
            )
            return list(result.scalars().all())

    async def create_product(self, db: AsyncSession, payload: ProductCreate) -> Product:
        name = payload.name.strip()
        if not name:
            raise ValidationError("Product name is required", field="name")
        with database_errors("Could not create the product"):
            if await self._by_name(db, name) is not None:
                raise ValidationError("Product already exists", field="name")
            product = Product(name=name, type=payload.type, is_active=True)
            db.add(product)
            await db.flush()
        logger.info("Product %s created: %s", product.id, name)
        return product

    async def update_product(self, db: AsyncSession, product_id: str, payload: ProductUpdate) -> Product:
        with database_errors("Could not update the product", product_id=product_id):
            product = await lock_one(db, Product, product_id)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=product_id)
            if payload.name is not None:
                name = payload.name.strip()
                existing = await self._by_name(db, name)
                if existing is not None and existing.id != product.id:
                    raise ValidationError("Product already exists", field="name")
                product.name = name
            if payload.type is not None:
                product.type = payload.type
            if payload.is_active is not None:
                product.is_active = payload.is_active
            await db.flush()
        return product

    async def deactivate_product(self, db: AsyncSession, product_id: str) -> Product:
        with database_errors("Could not deactivate the product", product_id=product_id):
            product = await lock_one(db, Product, product_id)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=product_id)
            product.is_active = False
            await db.flush()
        logger.info("Product %s deactivated", product_id)
        return product

    async def initialize_defaults(self, db: AsyncSession) -> List[Product]:
        """Adds any missing default catalog entries. Returns only the ones created."""
        created: List[Product] = []
        with database_errors("Could not initialize products"):
            for name, product_type in DEFAULT_CATALOG:
                if await self._by_name(db, name) is not None:
                    continue
                product = Product(name=name, type=product_type, is_active=True)
                db.add(product)
                created.append(product)
            await db.flush()
        logger.info("Catalog initialized: %d new products", len(created))
        return created


product_service = ProductService()
