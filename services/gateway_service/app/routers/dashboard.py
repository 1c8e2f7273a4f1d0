"""Dashboard aggregates for astrologers and admins."""

from decimal import Decimal

from fastapi import APIRouter, Depends
from libs.common.currency import as_rupees
from libs.db.session import get_async_db
from pydantic import BaseModel
from services.catalog_service.models import Product
from services.customers_service.models import Customer
from services.orders_service.models import Order, OrderStatus
from services.users_service.gate import require_admin, require_approved
from services.users_service.models import UserProfile, UserRole
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["dashboard"])

# Share of paid revenue passed on to the booking astrologer
PAYOUT_RATE = Decimal("0.70")

REVENUE_STATUSES = (OrderStatus.PAID, OrderStatus.DELIVERED)


class MemberDashboardResponse(BaseModel):
    total_bookings: int
    total_revenue: Decimal
    estimated_payout: Decimal


class AdminDashboardStats(BaseModel):
    pending_approvals: int
    total_customers: int
    total_products: int
    orders_by_status: dict[str, int]


@router.get("/me/dashboard", response_model=MemberDashboardResponse)
async def get_member_dashboard(
    profile: UserProfile = Depends(require_approved),
    db: AsyncSession = Depends(get_async_db),
):
    """Booking count, paid revenue and estimated payout for the caller."""
    total_bookings = await db.scalar(
        select(func.count(Order.id)).where(Order.booked_by == profile.email)
    )
    total_revenue = await db.scalar(
        select(func.coalesce(func.sum(Order.amount), 0)).where(
            Order.booked_by == profile.email,
            Order.status.in_(REVENUE_STATUSES),
        )
    )
    total_revenue = as_rupees(total_revenue or 0)
    return MemberDashboardResponse(
        total_bookings=total_bookings or 0,
        total_revenue=total_revenue,
        estimated_payout=as_rupees(total_revenue * PAYOUT_RATE),
    )


@router.get("/admin/dashboard-stats", response_model=AdminDashboardStats)
async def get_admin_dashboard_stats(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Counts across the whole marketplace (admin only)."""
    pending = await db.scalar(
        select(func.count(UserProfile.id)).where(
            UserProfile.approved.is_(False), UserProfile.role == UserRole.USER
        )
    )
    customers = await db.scalar(select(func.count(Customer.id)))
    products = await db.scalar(
        select(func.count(Product.id)).where(Product.is_deleted.is_(False))
    )
    rows = await db.execute(
        select(Order.status, func.count(Order.id)).group_by(Order.status)
    )
    orders_by_status = {s.value: 0 for s in OrderStatus}
    for order_status, count in rows.all():
        orders_by_status[order_status.value] = count

    return AdminDashboardStats(
        pending_approvals=pending or 0,
        total_customers=customers or 0,
        total_products=products or 0,
        orders_by_status=orders_by_status,
    )
