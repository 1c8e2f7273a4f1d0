"""Integration tests for dashboard aggregates."""

from decimal import Decimal

import pytest
from services.orders_service.models import OrderStatus
from tests.factories import (
    CustomerFactory,
    OrderFactory,
    ProductFactory,
    auth_headers,
)

API = "/api/v1"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_member_dashboard_counts_only_paid_revenue(
    client, db_session, approved_user
):
    email = approved_user.email
    db_session.add_all(
        [
            OrderFactory.create(
                booked_by=email, amount=Decimal("1000.00"), status=OrderStatus.PAID
            ),
            OrderFactory.create(
                booked_by=email, amount=Decimal("500.00"), status=OrderStatus.DELIVERED
            ),
            OrderFactory.create(booked_by=email, amount=Decimal("700.00")),
            OrderFactory.create(
                booked_by=email, amount=Decimal("900.00"), status=OrderStatus.EXPIRED
            ),
            OrderFactory.create(booked_by="other@devrang.in", status=OrderStatus.PAID),
        ]
    )
    await db_session.commit()

    response = await client.get(f"{API}/me/dashboard", headers=auth_headers(email))

    assert response.status_code == 200
    data = response.json()
    assert data["total_bookings"] == 4
    assert Decimal(data["total_revenue"]) == Decimal("1500.00")
    assert Decimal(data["estimated_payout"]) == Decimal("1050.00")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_member_dashboard_empty(client, approved_user):
    response = await client.get(
        f"{API}/me/dashboard", headers=auth_headers(approved_user.email)
    )

    assert response.json()["total_bookings"] == 0
    assert Decimal(response.json()["total_revenue"]) == Decimal("0")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_dashboard_stats(
    client, db_session, admin_user, approved_user, pending_user
):
    db_session.add_all(
        [
            CustomerFactory.create(),
            ProductFactory.create(),
            ProductFactory.create(is_deleted=True),
            OrderFactory.create(status=OrderStatus.PAID),
            OrderFactory.create(status=OrderStatus.PAID),
            OrderFactory.create(),
        ]
    )
    await db_session.commit()

    response = await client.get(
        f"{API}/admin/dashboard-stats", headers=auth_headers(admin_user.email)
    )

    assert response.status_code == 200
    assert response.json() == {
        "pending_approvals": 1,
        "total_customers": 1,
        "total_products": 1,
        "orders_by_status": {"created": 1, "paid": 2, "delivered": 0, "expired": 0},
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_dashboard_requires_admin(client, approved_user):
    response = await client.get(
        f"{API}/admin/dashboard-stats", headers=auth_headers(approved_user.email)
    )
    assert response.status_code == 403
