"""
Shared fixtures: an in-memory SQLite database per test, the FastAPI app
wired to it, and factories for users, providers and bookings.
"""

import os

# must be in place before homehelp.core.config is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["CACHE_ENABLED"] = "false"
os.environ["TASK_QUEUE_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.future import select
from sqlalchemy.pool import StaticPool

from homehelp.core.database import get_db
from homehelp.main import app
from homehelp.modules.auth.service import create_access_token, get_password_hash
from homehelp.modules.services.service import seed_default_services
from homehelp.shared import cache
from homehelp.shared.models import (
    Base,
    Booking,
    BookingStatus,
    ProviderProfile,
    Service,
    ServiceCategory,
    User,
)

TEST_PASSWORD = "secret123"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


def future_date(days: int = 3) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def services(session_factory):
    """The seeded default catalog, keyed by service name."""
    async with session_factory() as db:
        await seed_default_services(db)
        result = await db.execute(select(Service))
        return {s.name: s for s in result.scalars().all()}


@pytest.fixture
async def client(session_factory, services):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.uid)}"}
    return _headers


@pytest.fixture
def create_user(session_factory):
    async def _create(username: str, role: str = "customer", **fields) -> User:
        fields.setdefault("email", f"{username}@homehelp.io")
        fields.setdefault("name", username.title())
        async with session_factory() as db:
            user = User(username=username, password_hash=TEST_PASSWORD_HASH, role=role, **fields)
            db.add(user)
            await db.commit()
            return user
    return _create


@pytest.fixture
def create_provider(session_factory, create_user, services):
    async def _create(
        username: str,
        service_names=("Plumbing Repair",),
        hourly_rate: float = 50.0,
        category: ServiceCategory = ServiceCategory.plumbing,
        years_of_experience: int = 5,
        **user_fields,
    ):
        user_fields.setdefault("city", "Springfield")
        user = await create_user(username, role="provider", **user_fields)
        async with session_factory() as db:
            found = (await db.execute(
                select(Service).where(Service.name.in_(list(service_names)))
            )).scalars().all()
            profile = ProviderProfile(
                user_id=user.uid,
                hourly_rate=hourly_rate,
                category=category,
                years_of_experience=years_of_experience,
                work_images=[],
            )
            profile.services = list(found)
            db.add(profile)
            await db.commit()
            return user, profile
    return _create


@pytest.fixture
def create_booking(session_factory):
    """Insert a booking directly, in any status."""
    async def _create(
        customer: User,
        provider: User,
        service: Service,
        status: BookingStatus = BookingStatus.requested,
        total_amount: float = 100.0,
    ) -> Booking:
        async with session_factory() as db:
            booking = Booking(
                customer_id=customer.uid,
                provider_id=provider.uid,
                service_id=service.uid,
                status=status.value,
                scheduled_date=future_date(),
                description="Leaking kitchen sink",
                address="12 Elm Street",
                city="Springfield",
                duration_hours=2.0,
                total_amount=total_amount,
            )
            db.add(booking)
            await db.commit()
            return booking
    return _create


@pytest.fixture
async def customer(create_user):
    return await create_user("alice", city="Springfield")


@pytest.fixture
async def admin(create_user):
    return await create_user("root", role="admin")


@pytest.fixture
async def provider(create_provider):
    """A plumber in Springfield; returns (user, profile)."""
    return await create_provider("bob", bio="Licensed plumber, 24/7 call-outs")


class FakeRedis:
    """In-memory stand-in for the few Redis calls the cache makes."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex

    def scan_iter(self, pattern):
        prefix = pattern.rstrip("*")
        return [k for k in list(self.store) if k.startswith(prefix)]

    def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(cache.settings, "CACHE_ENABLED", True)
    monkeypatch.setattr(cache, "_client", fake)
    return fake
