import os
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Test settings must be in the environment before any app module reads them
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
load_dotenv(env_test_path, override=True)

from libs.common.config import get_settings
from libs.db.config import init_db
from services.gateway_service.app.main import app
from services.orders_service.razorpay_client import PaymentLink, RazorpayError

# Import all models so metadata includes every table
from services.catalog_service import models as _catalog_models  # noqa: F401
from services.customers_service import models as _customer_models  # noqa: F401
from services.orders_service import models as _order_models  # noqa: F401
from services.users_service import models as _user_models  # noqa: F401

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()


class FakeRazorpayClient:
    """Stands in for RazorpayClient; records calls and hands out link ids."""

    def __init__(self):
        self.calls: list[dict] = []
        self.error: RazorpayError | None = None

    def fail_with(self, message: str = "Gateway unavailable", status_code: int = 502):
        self.error = RazorpayError(message=message, status_code=status_code)

    async def create_payment_link(self, **kwargs) -> PaymentLink:
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        link_id = f"plink_{uuid.uuid4().hex[:14]}"
        return PaymentLink(
            id=link_id,
            short_url=f"https://rzp.io/i/{link_id[-8:]}",
            status="created",
            amount=kwargs["amount_paise"],
            currency=kwargs["currency"],
        )


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory database per test.
    StaticPool keeps every session on the one connection that holds the tables.
    """
    engine = create_async_engine(
        settings.DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def razorpay() -> FakeRazorpayClient:
    return FakeRazorpayClient()


@pytest_asyncio.fixture
async def client(db_session, razorpay) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient with the app, overridden DB dependency and a fake
    payment gateway.
    """
    from libs.db.session import get_async_db
    from services.orders_service.razorpay_client import get_razorpay_client

    app.dependency_overrides[get_async_db] = lambda: db_session
    app.dependency_overrides[get_razorpay_client] = lambda: razorpay

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def approved_user(db_session):
    from tests.factories import UserProfileFactory

    profile = UserProfileFactory.create(email="astro@devrang.in", name="Astro One")
    db_session.add(profile)
    await db_session.commit()
    return profile


@pytest_asyncio.fixture
async def admin_user(db_session):
    from services.users_service.models import UserRole
    from tests.factories import UserProfileFactory

    profile = UserProfileFactory.create(
        email="admin@devrang.in", name="Admin", role=UserRole.ADMIN
    )
    db_session.add(profile)
    await db_session.commit()
    return profile


@pytest_asyncio.fixture
async def pending_user(db_session):
    from tests.factories import UserProfileFactory

    profile = UserProfileFactory.create(
        email="newbie@devrang.in", name="Newbie", approved=False
    )
    db_session.add(profile)
    await db_session.commit()
    return profile
