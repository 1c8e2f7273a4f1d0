"""Access control gate.

A caller moves through these states::

    anonymous -> authenticating -> authenticated_unapproved
                                -> authenticated_approved
                                -> authenticated_admin

The identity token only gets a caller to `authenticating`; the user profile
(looked up by email) decides which authenticated state applies. Only an
admin can move a profile from unapproved to approved.

Protected routes depend on `require_approved` / `require_admin`, so denial
happens during dependency resolution, before any handler produces data.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.errors import AuthorizationError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.users_service.models import UserProfile, UserRole
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

NOT_APPROVED_REDIRECT = "/auth/error?error=NOT_APPROVED"


class AccessState(str, enum.Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED_UNAPPROVED = "authenticated_unapproved"
    AUTHENTICATED_APPROVED = "authenticated_approved"
    AUTHENTICATED_ADMIN = "authenticated_admin"


def resolve_access_state(profile: Optional[UserProfile]) -> AccessState:
    """Map a looked-up profile (or its absence) to the caller's state."""
    if profile is None:
        return AccessState.AUTHENTICATING
    if profile.role == UserRole.ADMIN:
        return AccessState.AUTHENTICATED_ADMIN
    if profile.approved:
        return AccessState.AUTHENTICATED_APPROVED
    return AccessState.AUTHENTICATED_UNAPPROVED


def not_approved_error() -> AuthorizationError:
    return AuthorizationError(
        detail="Your account is awaiting administrator approval",
        code="NOT_APPROVED",
        redirect_to=NOT_APPROVED_REDIRECT,
    )


async def find_profile(db: AsyncSession, email: str) -> Optional[UserProfile]:
    result = await db.execute(
        select(UserProfile).where(func.lower(UserProfile.email) == email.lower())
    )
    return result.scalar_one_or_none()


@dataclass
class SignInResult:
    profile: UserProfile
    state: AccessState
    first_sign_in: bool


async def sign_in(db: AsyncSession, user: AuthUser) -> SignInResult:
    """
    Complete an identity-provider sign-in.

    A first sign-in always goes through so the profile can be created; later
    sign-ins by unapproved users raise AuthorizationError.
    """
    profile = await find_profile(db, user.email)

    if profile is None:
        # Role is decided once, here; afterwards the profile is authoritative.
        role = (
            UserRole.ADMIN
            if user.email.lower() in get_settings().admin_emails
            else UserRole.USER
        )
        profile = UserProfile(
            email=user.email.lower(),
            name=user.name or "",
            image=user.image,
            role=role,
            approved=role == UserRole.ADMIN,
            last_login_at=utc_now(),
        )
        db.add(profile)
        await db.commit()
        await db.refresh(profile)
        logger.info(
            f"Created {role.value} profile for {profile.email}",
            extra={"extra_fields": {"email": profile.email, "role": role.value}},
        )
        return SignInResult(
            profile=profile,
            state=resolve_access_state(profile),
            first_sign_in=True,
        )

    profile.last_login_at = utc_now()
    db.add(profile)
    await db.commit()
    await db.refresh(profile)

    state = resolve_access_state(profile)
    if state == AccessState.AUTHENTICATED_UNAPPROVED:
        logger.info(
            f"Sign-in denied for unapproved user {profile.email}",
            extra={"extra_fields": {"email": profile.email}},
        )
        raise not_approved_error()

    return SignInResult(profile=profile, state=state, first_sign_in=False)


async def get_current_profile(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> UserProfile:
    """Resolve the caller's profile; callers without one are denied."""
    profile = await find_profile(db, current_user.email)
    if profile is None:
        raise AuthorizationError(
            detail="No profile exists for this account", code="UNKNOWN_USER"
        )
    return profile


async def require_approved(
    profile: UserProfile = Depends(get_current_profile),
) -> UserProfile:
    """Allow approved users and admins through."""
    if resolve_access_state(profile) == AccessState.AUTHENTICATED_UNAPPROVED:
        raise not_approved_error()
    return profile


async def require_admin(
    profile: UserProfile = Depends(get_current_profile),
) -> UserProfile:
    """Allow admins only; the profile role is the single source of truth."""
    if resolve_access_state(profile) != AccessState.AUTHENTICATED_ADMIN:
        raise AuthorizationError(
            detail="Admin privileges required", code="ADMIN_REQUIRED"
        )
    return profile
