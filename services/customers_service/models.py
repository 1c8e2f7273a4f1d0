"""Customer records managed by astrologers."""

import uuid
from datetime import datetime

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    # Optional fields are stored as empty strings rather than NULL
    email: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    shipping_address: Mapped[str] = mapped_column(Text, default="", nullable=False)
    dob: Mapped[str] = mapped_column(String(32), default="", nullable=False)
    gotra: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    rating: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    comments: Mapped[str] = mapped_column(Text, default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Customer {self.name} {self.phone}>"
