"""Admin user router - approval and rejection of registered users."""

from typing import List

from fastapi import APIRouter, Depends
from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.users_service.gate import find_profile, require_admin
from services.users_service.models import UserProfile, UserRole
from services.users_service.schemas import ApprovalAction, PendingUserResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/admin/users", tags=["admin-users"])
logger = get_logger(__name__)


@router.get("/pending", response_model=List[PendingUserResponse])
async def list_pending_users(
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List users awaiting approval (admin only)."""
    query = (
        select(UserProfile)
        .where(
            UserProfile.approved.is_(False),
            UserProfile.role == UserRole.USER,
        )
        .order_by(UserProfile.created_at.desc())
    )
    result = await db.execute(query)
    return result.scalars().all()


@router.put("/approve")
async def approve_user(
    action: ApprovalAction,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Approve a user by email (admin only). Approving twice is a no-op."""
    profile = await find_profile(db, action.email)
    if not profile:
        raise NotFoundError(detail="User not found")

    if not profile.approved:
        profile.approved = True
        db.add(profile)
        await db.commit()
        logger.info(
            f"User {profile.email} approved by {admin.email}",
            extra={"extra_fields": {"email": profile.email}},
        )

    return {"success": True}


@router.delete("/reject")
async def reject_user(
    action: ApprovalAction,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Reject a user by email (admin only).

    The profile is removed; the user can sign in again later to reapply.
    """
    profile = await find_profile(db, action.email)
    if not profile:
        raise NotFoundError(detail="User not found")

    await db.delete(profile)
    await db.commit()
    logger.info(
        f"User {action.email} rejected by {admin.email}",
        extra={"extra_fields": {"email": action.email}},
    )

    return {"success": True}
