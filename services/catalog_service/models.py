"""Product catalog model."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import JSON, Boolean, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Numeric, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

JSONType = JSON().with_variant(JSONB(), "postgresql")


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class ProductCategory(str, enum.Enum):
    PERFUME = "Perfume"
    GIFT = "Gift"


class Recipient(str, enum.Enum):
    HIM = "Him"
    HER = "Her"
    THEM = "Them"
    ANYONE = "Anyone"


class Product(Base):
    """A catalog entry astrologers can book for their customers."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    category: Mapped[ProductCategory] = mapped_column(
        SAEnum(
            ProductCategory,
            name="product_category_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    brand: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    use: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    story: Mapped[str] = mapped_column(Text, default="", nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    affiliate_link: Mapped[str] = mapped_column(
        String(1024), default="", nullable=False
    )
    tags: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    occasion: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    recipient: Mapped[Recipient] = mapped_column(
        SAEnum(
            Recipient,
            name="product_recipient_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=Recipient.ANYONE,
        nullable=False,
    )

    # Soft delete keeps order snapshots traceable to their catalog entry
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def snapshot(self) -> dict:
        """Copy of the fields an order keeps, decoupled from later edits."""
        return {
            "id": str(self.id),
            "name": self.name,
            "category": self.category.value,
            "brand": self.brand,
            "type": self.type,
            "size": self.size,
            "price": str(self.price),
            "image_url": self.image_url,
        }

    def __repr__(self):
        return f"<Product {self.name}>"
