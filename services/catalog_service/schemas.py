"""Pydantic schemas for catalog service."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from services.catalog_service.models import ProductCategory, Recipient

ProductSort = Literal["name-asc", "name-desc", "price-asc", "price-desc"]


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ProductCategory
    brand: str = Field("", max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    size: Optional[str] = Field(None, max_length=50)
    use: Optional[str] = None
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    story: str = ""
    image_url: str = ""
    affiliate_link: str = ""
    tags: List[str] = Field(default_factory=list)
    occasion: List[str] = Field(default_factory=list)
    recipient: Recipient = Recipient.ANYONE


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[ProductCategory] = None
    brand: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    size: Optional[str] = Field(None, max_length=50)
    use: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    story: Optional[str] = None
    image_url: Optional[str] = None
    affiliate_link: Optional[str] = None
    tags: Optional[List[str]] = None
    occasion: Optional[List[str]] = None
    recipient: Optional[Recipient] = None


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
