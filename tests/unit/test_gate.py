"""Unit tests for the access control gate."""

import pytest
from libs.auth.models import AuthUser
from libs.common.errors import AuthorizationError
from services.users_service.gate import (
    NOT_APPROVED_REDIRECT,
    AccessState,
    require_admin,
    require_approved,
    resolve_access_state,
    sign_in,
)
from services.users_service.models import UserRole
from tests.factories import UserProfileFactory


def _identity(email: str, name: str = "Seeker") -> AuthUser:
    return AuthUser(sub=f"sub-{email}", email=email, name=name)


@pytest.mark.unit
def test_resolve_access_state():
    assert resolve_access_state(None) == AccessState.AUTHENTICATING
    assert (
        resolve_access_state(UserProfileFactory.create(approved=False))
        == AccessState.AUTHENTICATED_UNAPPROVED
    )
    assert (
        resolve_access_state(UserProfileFactory.create(approved=True))
        == AccessState.AUTHENTICATED_APPROVED
    )
    assert (
        resolve_access_state(
            UserProfileFactory.create(role=UserRole.ADMIN, approved=False)
        )
        == AccessState.AUTHENTICATED_ADMIN
    )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_first_sign_in_creates_unapproved_profile(db_session):
    result = await sign_in(db_session, _identity("First@Example.com"))

    assert result.first_sign_in is True
    assert result.state == AccessState.AUTHENTICATED_UNAPPROVED
    assert result.profile.email == "first@example.com"
    assert result.profile.role == UserRole.USER
    assert result.profile.approved is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_second_sign_in_while_unapproved_is_denied(db_session):
    await sign_in(db_session, _identity("waiting@example.com"))

    with pytest.raises(AuthorizationError) as exc_info:
        await sign_in(db_session, _identity("waiting@example.com"))

    assert exc_info.value.code == "NOT_APPROVED"
    assert exc_info.value.redirect_to == NOT_APPROVED_REDIRECT


@pytest.mark.asyncio
@pytest.mark.unit
async def test_listed_admin_email_gets_admin_profile(db_session):
    result = await sign_in(db_session, _identity("founder@devrang.in"))

    assert result.state == AccessState.AUTHENTICATED_ADMIN
    assert result.profile.role == UserRole.ADMIN
    assert result.profile.approved is True


@pytest.mark.asyncio
@pytest.mark.unit
async def test_approved_sign_in_updates_last_login(db_session):
    profile = UserProfileFactory.create(email="regular@example.com")
    db_session.add(profile)
    await db_session.commit()

    result = await sign_in(db_session, _identity("regular@example.com"))

    assert result.first_sign_in is False
    assert result.state == AccessState.AUTHENTICATED_APPROVED
    assert result.profile.last_login_at is not None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_role_guards():
    pending = UserProfileFactory.create(approved=False)
    approved = UserProfileFactory.create()
    admin = UserProfileFactory.create(role=UserRole.ADMIN)

    with pytest.raises(AuthorizationError):
        await require_approved(pending)
    assert await require_approved(approved) is approved
    assert await require_approved(admin) is admin

    with pytest.raises(AuthorizationError) as exc_info:
        await require_admin(approved)
    assert exc_info.value.code == "ADMIN_REQUIRED"
    assert await require_admin(admin) is admin
