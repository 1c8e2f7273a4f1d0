"""Customer CRUD router."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.customers_service.models import Customer
from services.customers_service.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
)
from services.users_service.gate import require_approved
from services.users_service.models import UserProfile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/customers", tags=["customers"])
logger = get_logger(__name__)


async def get_customer_or_404(db: AsyncSession, customer_id: uuid.UUID) -> Customer:
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()
    if not customer:
        raise NotFoundError(detail="Customer not found")
    return customer


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """List all customers, newest first."""
    result = await db.execute(select(Customer).order_by(Customer.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a customer. Name and phone are required."""
    customer = Customer(**customer_in.model_dump())
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    logger.info(
        f"Customer {customer.id} created by {profile.email}",
        extra={"extra_fields": {"customer_id": str(customer.id)}},
    )
    return customer


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: uuid.UUID,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_customer_or_404(db, customer_id)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: uuid.UUID,
    customer_in: CustomerUpdate,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """Update the supplied fields of a customer."""
    customer = await get_customer_or_404(db, customer_id)

    update_data = customer_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(customer, field, value)

    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: uuid.UUID,
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    customer = await get_customer_or_404(db, customer_id)
    await db.delete(customer)
    await db.commit()
    logger.info(
        f"Customer {customer_id} deleted by {profile.email}",
        extra={"extra_fields": {"customer_id": str(customer_id)}},
    )
    return {"message": "Customer deleted"}
