"""Catalog lookups shared with the orders service."""

import uuid
from typing import Iterable

from libs.common.errors import NotFoundError
from services.catalog_service.models import Product
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


async def get_active_product(db: AsyncSession, product_id: uuid.UUID) -> Product:
    """Load a product that has not been deleted, or raise NotFoundError."""
    result = await db.execute(
        select(Product).where(Product.id == product_id, Product.is_deleted.is_(False))
    )
    product = result.scalar_one_or_none()
    if not product:
        raise NotFoundError(detail="Product not found")
    return product


async def get_active_products(
    db: AsyncSession, product_ids: Iterable[uuid.UUID]
) -> dict[uuid.UUID, Product]:
    """Load several products keyed by id; missing or deleted ids raise."""
    wanted = set(product_ids)
    result = await db.execute(
        select(Product).where(Product.id.in_(wanted), Product.is_deleted.is_(False))
    )
    products = {product.id: product for product in result.scalars().all()}
    if wanted - products.keys():
        raise NotFoundError(detail="Product not found")
    return products
