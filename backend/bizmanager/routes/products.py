"""
Business Manager Backend — Product Catalog Routes
=================================================

What:  /api/products/products: list active, create, update, deactivate,
       initialize the default catalog.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import ErrorResponse
from bizmanager.schemas.products import (
    CatalogInitialized,
    ProductCreate,
    ProductDeactivated,
    ProductRead,
    ProductUpdate,
)
from bizmanager.services.product_service import product_service

router = APIRouter(prefix="/api/products", tags=["Products"])

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}


@router.get("/products", response_model=List[ProductRead], summary="List active products by name")
async def list_products(db: AsyncSession = Depends(get_db_session)) -> List[ProductRead]:
    products = await product_service.list_active(db)
    return [ProductRead.model_validate(p) for p in products]


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Name missing or already taken", "model": ErrorResponse}},
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductRead:
    return ProductRead.model_validate(await product_service.create_product(db, payload))


@router.post(
    "/products/initialize",
    response_model=CatalogInitialized,
    summary="Add any missing default catalog entries",
)
async def initialize_products(db: AsyncSession = Depends(get_db_session)) -> CatalogInitialized:
    created = await product_service.initialize_defaults(db)
    return CatalogInitialized(
        message="Products initialized successfully",
        created=len(created),
        products=[ProductRead.model_validate(p) for p in created],
    )


@router.put("/products/{product_id}", response_model=ProductRead, responses=_NOT_FOUND)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductRead:
    return ProductRead.model_validate(await product_service.update_product(db, product_id, payload))


@router.delete("/products/{product_id}", response_model=ProductDeactivated, responses=_NOT_FOUND)
async def deactivate_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProductDeactivated:
    product = await product_service.deactivate_product(db, product_id)
    return ProductDeactivated(
        message="Product deactivated successfully",
        product=ProductRead.model_validate(product),
    )
