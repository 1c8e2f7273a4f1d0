"""Pydantic schemas for users service."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr
from services.users_service.gate import AccessState
from services.users_service.models import UserRole


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    image: Optional[str] = None
    role: UserRole
    approved: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class CurrentUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    role: UserRole
    approved: bool


class PendingUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    created_at: datetime


class SignInResponse(BaseModel):
    state: AccessState
    first_sign_in: bool
    profile: UserProfileResponse


class ApprovalAction(BaseModel):
    email: EmailStr
