"""
Model factories and request helpers for tests.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(price=Decimal("500.00"))
    db_session.add(product)
    await db_session.commit()
"""

import json
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from jose import jwt

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _unique_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@test.com"


def _link_id() -> str:
    return f"plink_{uuid.uuid4().hex[:14]}"


def auth_headers(email: str, name: str = "Test Astrologer") -> dict:
    """Bearer header carrying a signed identity token for `email`."""
    from libs.common.config import get_settings

    settings = get_settings()
    token = jwt.encode(
        {
            "sub": f"google-{uuid.uuid5(uuid.NAMESPACE_DNS, email).hex[:12]}",
            "email": email,
            "name": name,
            "exp": _now() + timedelta(hours=1),
        },
        settings.AUTH_JWT_SECRET,
        algorithm=settings.AUTH_JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


def signed_webhook(event: dict, secret: str = None) -> tuple[bytes, dict]:
    """Serialize a webhook event and sign it like Razorpay does."""
    from libs.common.config import get_settings
    from services.orders_service.services.signature import (
        SIGNATURE_HEADER,
        compute_signature,
    )

    body = json.dumps(event).encode("utf-8")
    signature = compute_signature(
        body, secret or get_settings().RAZORPAY_WEBHOOK_SECRET
    )
    return body, {SIGNATURE_HEADER: signature, "Content-Type": "application/json"}


def payment_link_event(event_type: str, link_id: str) -> dict:
    return {
        "event": event_type,
        "payload": {"payment_link": {"entity": {"id": link_id, "status": "paid"}}},
    }


def payment_captured_event(
    order_id: str = None,
    link_id: str = None,
    payment_id: str = "pay_test123",
    method: str = "upi",
    created_at: int = 1760000000,
) -> dict:
    payment = {
        "id": payment_id,
        "method": method,
        "created_at": created_at,
        "order_id": order_id,
        "notes": {"payment_link_id": link_id} if link_id else {},
    }
    return {"event": "payment.captured", "payload": {"payment": {"entity": payment}}}


# ---------------------------------------------------------------------------
# Users Service
# ---------------------------------------------------------------------------


class UserProfileFactory:
    @staticmethod
    def create(**overrides):
        from services.users_service.models import UserProfile, UserRole

        defaults = {
            "id": _uuid(),
            "email": _unique_email(),
            "name": "Test Astrologer",
            "role": UserRole.USER,
            "approved": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return UserProfile(**defaults)


# ---------------------------------------------------------------------------
# Customers Service
# ---------------------------------------------------------------------------


class CustomerFactory:
    @staticmethod
    def create(**overrides):
        from services.customers_service.models import Customer

        defaults = {
            "id": _uuid(),
            "name": "Meera Shah",
            "phone": "9812345678",
            "email": "meera@example.com",
            "shipping_address": "4 Park Street, Kolkata",
            "gotra": "Bharadwaj",
            "rating": 3,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Customer(**defaults)


# ---------------------------------------------------------------------------
# Catalog Service
# ---------------------------------------------------------------------------


class ProductFactory:
    @staticmethod
    def create(**overrides):
        from services.catalog_service.models import (
            Product,
            ProductCategory,
            Recipient,
        )

        defaults = {
            "id": _uuid(),
            "name": f"Attar {uuid.uuid4().hex[:6]}",
            "category": ProductCategory.PERFUME,
            "brand": "Devrang",
            "type": "Attar",
            "size": "10ml",
            "use": "Daily wear",
            "price": Decimal("500.00"),
            "tags": ["woody"],
            "occasion": ["Daily"],
            "recipient": Recipient.ANYONE,
            "is_deleted": False,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Product(**defaults)


# ---------------------------------------------------------------------------
# Orders Service
# ---------------------------------------------------------------------------


class OrderFactory:
    @staticmethod
    def create(**overrides):
        from services.orders_service.models import Order, OrderStatus

        link_id = overrides.pop("order_id", None) or _link_id()
        defaults = {
            "id": _uuid(),
            "order_id": link_id,
            "payment_link_id": link_id,
            "payment_link_url": f"https://rzp.io/i/{link_id[-8:]}",
            "product": {"id": str(_uuid()), "name": "Test Attar", "price": "500.00"},
            "customer": {
                "name": "Meera Shah",
                "email": "meera@example.com",
                "phone": "9812345678",
                "address": "4 Park Street, Kolkata",
            },
            "customer_ref": str(_uuid()),
            "booked_by": _unique_email(),
            "amount": Decimal("500.00"),
            "currency": "INR",
            "status": OrderStatus.CREATED,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Order(**defaults)
