"""Sign-in and current-user endpoints."""

from fastapi import APIRouter, Depends, Request
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.errors import NotFoundError
from libs.common.rate_limit import auth_limit
from libs.db.session import get_async_db
from services.users_service.gate import find_profile, sign_in
from services.users_service.schemas import (
    CurrentUserResponse,
    SignInResponse,
    UserProfileResponse,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["auth"])


@router.post("/auth/sign-in", response_model=SignInResponse)
@auth_limit
async def complete_sign_in(
    request: Request,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Called once the identity provider has authenticated the caller.

    Creates the profile on first sign-in; rejects unapproved users afterwards.
    """
    result = await sign_in(db, current_user)
    return SignInResponse(
        state=result.state,
        first_sign_in=result.first_sign_in,
        profile=UserProfileResponse.model_validate(result.profile),
    )


@router.get("/users/me", response_model=CurrentUserResponse)
async def get_me(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Return the caller's role and approval flag."""
    profile = await find_profile(db, current_user.email)
    if not profile:
        raise NotFoundError(detail="Unknown user", code="UNKNOWN_USER")
    return profile
