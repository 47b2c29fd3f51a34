"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.api.deps import get_storage
from app.core.cache import query_cache
from app.core.database import Base, get_db
from app.core.security import get_password_hash
from app.main import app
from app.models.user import User
from app.services.storage import StorageService


# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def clear_query_cache():
    """Cached reads must not leak between tests."""
    query_cache.clear()
    yield
    query_cache.clear()


@pytest.fixture
async def test_engine():
    """Create a fresh database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves foreign key enforcement off by default
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and asserting on it directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path) -> StorageService:
    return StorageService(root=str(tmp_path / "buckets"), bucket="documents", max_size_mb=1)


@pytest.fixture
async def client(session_factory, storage) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client whose requests each get their own session and
    transaction, as in production.
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    user = User(
        email="test@example.com",
        hashed_password=get_password_hash("testpassword123"),
        first_name="Test",
        last_name="User",
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def auth_client(
    client: AsyncClient,
    test_user: User,
) -> AsyncClient:
    """Create authenticated test client."""
    response = await client.post(
        "/api/v1/auth/login",
        json={
            "email": "test@example.com",
            "password": "testpassword123",
        },
    )
    tokens = response.json()

    client.headers["Authorization"] = f"Bearer {tokens['access_token']}"

    return client


@pytest.fixture
async def company(auth_client: AsyncClient) -> dict:
    response = await auth_client.post(
        "/api/v1/companies",
        json={"name": "Acme Makina", "type": "customer", "contact_person": "Ayse Demir"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def product(auth_client: AsyncClient) -> dict:
    response = await auth_client.post(
        "/api/v1/products",
        json={"name": "Pump", "brand": "Grundfos", "model": "CR-10", "unit_price": "100.00"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def second_product(auth_client: AsyncClient) -> dict:
    response = await auth_client.post(
        "/api/v1/products",
        json={"name": "Valve", "unit_price": "50.00"},
    )
    assert response.status_code == 201
    return response.json()
