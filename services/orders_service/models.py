"""Order model and status lifecycle."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import JSON, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Numeric, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

JSONType = JSON().with_variant(JSONB(), "postgresql")

CURRENCY = "INR"
SELF_CUSTOMER = "self"


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class OrderStatus(str, enum.Enum):
    CREATED = "created"
    PAID = "paid"
    DELIVERED = "delivered"
    EXPIRED = "expired"


# Statuses an order may be in for each target status to be applied.
# Re-applying a status to itself is allowed so redelivered events overwrite.
ALLOWED_SOURCES = {
    OrderStatus.PAID: (OrderStatus.CREATED, OrderStatus.PAID),
    OrderStatus.DELIVERED: (OrderStatus.PAID, OrderStatus.DELIVERED),
    OrderStatus.EXPIRED: (OrderStatus.CREATED,),
}


class Order(Base):
    """One checkout transaction for a single product on behalf of a customer."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Gateway identifiers
    order_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    payment_link_id: Mapped[Optional[str]] = mapped_column(
        String(64), index=True, nullable=True
    )
    payment_link_url: Mapped[Optional[str]] = mapped_column(
        String(1024), nullable=True
    )

    # Snapshots taken at checkout
    product: Mapped[dict] = mapped_column(JSONType, nullable=False)
    customer: Mapped[dict] = mapped_column(JSONType, nullable=False)
    customer_ref: Mapped[str] = mapped_column(String(64), nullable=False)
    booked_by: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), default=CURRENCY, nullable=False)

    status: Mapped[OrderStatus] = mapped_column(
        SAEnum(
            OrderStatus,
            name="order_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=OrderStatus.CREATED,
        nullable=False,
    )

    payment_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Order {self.order_id} {self.status.value}>"
