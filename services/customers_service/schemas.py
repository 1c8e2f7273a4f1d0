"""Pydantic schemas for customers service."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=32)
    email: str = Field("", max_length=255)
    shipping_address: str = ""
    dob: str = Field("", max_length=32)
    gotra: str = Field("", max_length=100)
    rating: int = Field(0, ge=0, le=5)
    comments: str = ""


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    email: Optional[str] = Field(None, max_length=255)
    shipping_address: Optional[str] = None
    dob: Optional[str] = Field(None, max_length=32)
    gotra: Optional[str] = Field(None, max_length=100)
    rating: Optional[int] = Field(None, ge=0, le=5)
    comments: Optional[str] = None


class CustomerResponse(CustomerBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
