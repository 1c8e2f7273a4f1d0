"""Pydantic schemas for orders service."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from services.orders_service.cart import Cart
from services.orders_service.models import OrderStatus


class CheckoutRequest(BaseModel):
    cart: Cart
    # "self" or a customer id; None means nothing was selected
    customer: Optional[str] = Field(None, max_length=64)


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    order_id: str
    payment_link_url: Optional[str] = None
    product: dict
    customer: dict
    customer_ref: str
    booked_by: str
    amount: Decimal
    currency: str
    status: OrderStatus
    payment_id: Optional[str] = None
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime


class CheckoutResponse(BaseModel):
    order: OrderResponse
    payment_link: str
    cart: Cart


class CartLine(BaseModel):
    product_id: uuid.UUID
    name: str
    quantity: int
    catalog_price: Decimal
    unit_price: Decimal
    line_total: Decimal


class CartSummaryResponse(BaseModel):
    lines: list[CartLine]
    total: Decimal
