"""Shared pytest fixtures for unit and integration tests."""

import os
import uuid

# Settings are read at import time; these must be set before app.* is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config import settings
from app.core.security import gen_short_token
from app.database import Base, get_db
from app.models.enums import UserRole
from app.store import Stores

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def db_engine():
    """Fresh in-memory database per test; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def stores(db_session) -> Stores:
    return Stores(db_session)


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(session_factory, api_base: str):
    """Async HTTP client against the app, with get_db bound to the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


@pytest.fixture
def make_headers():
    """Build bearer headers for an arbitrary role (and optionally a real user id)."""
    def _make(role: int = UserRole.ADMIN, user_id: str = None) -> dict:
        token = gen_short_token({"userId": user_id or str(uuid.uuid4()), "userRole": int(role)})
        return {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def admin_headers(make_headers) -> dict:
    return make_headers(UserRole.ADMIN)


@pytest.fixture
def member_headers(make_headers) -> dict:
    return make_headers(UserRole.MEMBER)


@pytest.fixture
async def school(async_client: AsyncClient, admin_headers: dict, unique_suffix: str) -> dict:
    """A school created through the API."""
    resp = await async_client.post(
        "/schools/addSchool",
        headers=admin_headers,
        json={"schoolName": f"Test School {unique_suffix}"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["school"]


@pytest.fixture
async def klass(async_client: AsyncClient, admin_headers: dict, school: dict) -> dict:
    """A class of ``school`` created through the API."""
    resp = await async_client.post(
        "/classes/addClass",
        headers=admin_headers,
        json={"className": "Grade 5A", "school": school["id"]},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["class"]


@pytest.fixture
async def student(async_client: AsyncClient, school: dict, klass: dict) -> dict:
    """A student enrolled anonymously in ``klass``."""
    resp = await async_client.post(
        "/students/addStudent",
        json={"studentName": "Ada Lovelace", "studentClass": klass["id"], "studentSchool": school["id"]},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["student"]
