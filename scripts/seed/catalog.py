#!/usr/bin/env python3
"""
Seed sample products and customers.

Records whose name already exists are skipped, so the script can be re-run
against a populated database.
"""

import asyncio
import os
import sys
from decimal import Decimal

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.common.logging import configure_logging, get_logger
from libs.db.config import AsyncSessionLocal, init_db
from services.catalog_service.models import Product, ProductCategory, Recipient
from services.customers_service.models import Customer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Chandan Attar",
        "category": ProductCategory.PERFUME,
        "brand": "Devrang",
        "type": "Attar",
        "size": "12ml",
        "use": "Calming sandalwood for evening puja",
        "price": Decimal("1200.00"),
        "story": "Distilled from Mysore sandalwood in copper degs.",
        "tags": ["sandalwood", "calming"],
        "occasion": ["Puja", "Festival"],
        "recipient": Recipient.ANYONE,
    },
    {
        "name": "Gulab Mist",
        "category": ProductCategory.PERFUME,
        "brand": "Devrang",
        "type": "Mist",
        "size": "100ml",
        "use": "Rose mist for daily freshness",
        "price": Decimal("650.00"),
        "story": "Steam-distilled Kannauj rose water.",
        "tags": ["rose", "fresh"],
        "occasion": ["Daily"],
        "recipient": Recipient.HER,
    },
    {
        "name": "Navratna Gift Box",
        "category": ProductCategory.GIFT,
        "brand": "Devrang",
        "type": "Gift Set",
        "use": "Nine-fragrance sampler for auspicious occasions",
        "price": Decimal("2500.00"),
        "story": "One fragrance for each of the nine planets.",
        "tags": ["gift", "sampler"],
        "occasion": ["Wedding", "Griha Pravesh"],
        "recipient": Recipient.THEM,
    },
]

SAMPLE_CUSTOMERS = [
    {
        "name": "Asha Verma",
        "phone": "9876500001",
        "email": "asha@example.com",
        "shipping_address": "12 MG Road, Pune",
        "gotra": "Kashyap",
        "rating": 4,
    },
    {
        "name": "Rohan Iyer",
        "phone": "9876500002",
    },
]


async def seed_catalog(session: AsyncSession) -> tuple[int, int]:
    """Insert missing sample records; returns (products, customers) created."""
    created_products = 0
    for product_data in SAMPLE_PRODUCTS:
        existing = await session.execute(
            select(Product.id).where(Product.name == product_data["name"])
        )
        if existing.first():
            logger.info(f"Skipped existing product: {product_data['name']}")
            continue
        session.add(Product(**product_data))
        created_products += 1
        logger.info(f"Inserted product: {product_data['name']}")

    created_customers = 0
    for customer_data in SAMPLE_CUSTOMERS:
        existing = await session.execute(
            select(Customer.id).where(Customer.name == customer_data["name"])
        )
        if existing.first():
            logger.info(f"Skipped existing customer: {customer_data['name']}")
            continue
        session.add(Customer(**customer_data))
        created_customers += 1
        logger.info(f"Inserted customer: {customer_data['name']}")

    await session.commit()
    return created_products, created_customers


async def main():
    configure_logging()
    await init_db()
    async with AsyncSessionLocal() as session:
        products, customers = await seed_catalog(session)
    logger.info(f"Seeding complete: {products} products, {customers} customers")


if __name__ == "__main__":
    asyncio.run(main())
