"""Catalog routers: browsing for approved users, management for admins."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.catalog_service.models import Product, ProductCategory
from services.catalog_service.queries import get_active_product
from services.catalog_service.schemas import (
    ProductCreate,
    ProductResponse,
    ProductSort,
    ProductUpdate,
)
from services.users_service.gate import require_admin, require_approved
from services.users_service.models import UserProfile
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/products", tags=["catalog"])
admin_router = APIRouter(prefix="/admin/products", tags=["admin-catalog"])
logger = get_logger(__name__)

SORT_ORDERS = {
    "name-asc": (Product.name.asc(),),
    "name-desc": (Product.name.desc(),),
    "price-asc": (Product.price.asc(), Product.name.asc()),
    "price-desc": (Product.price.desc(), Product.name.asc()),
}


# ============================================================================
# BROWSING
# ============================================================================


@router.get("", response_model=List[ProductResponse])
async def list_products(
    q: Optional[str] = Query(None, description="Search name or use"),
    type: Optional[str] = Query(None),
    category: Optional[ProductCategory] = Query(None),
    sort: ProductSort = Query("name-asc"),
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """List catalog products with optional search, filters and sorting."""
    query = select(Product).where(Product.is_deleted.is_(False))

    if q:
        pattern = f"%{q.strip()}%"
        query = query.where(or_(Product.name.ilike(pattern), Product.use.ilike(pattern)))
    if type:
        query = query.where(Product.type == type)
    if category:
        query = query.where(Product.category == category)

    query = query.order_by(*SORT_ORDERS[sort])
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_active_product(db, product_id)


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED
)
async def create_product(
    product_in: ProductCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Add a product to the catalog."""
    product = Product(**product_in.model_dump())
    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info(
        f"Product {product.id} created by {admin.email}",
        extra={"extra_fields": {"product_id": str(product.id)}},
    )
    return product


@admin_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    product_in: ProductUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await get_active_product(db, product_id)

    update_data = product_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(product, field, value)

    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product


@admin_router.delete("/{product_id}")
async def delete_product(
    product_id: uuid.UUID,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Soft-delete a product so it drops out of the catalog."""
    product = await get_active_product(db, product_id)
    product.is_deleted = True
    db.add(product)
    await db.commit()
    logger.info(
        f"Product {product_id} deleted by {admin.email}",
        extra={"extra_fields": {"product_id": str(product_id)}},
    )
    return {"message": "Product deleted"}
