"""
Listing API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the whole suite.
How:   HTTP tests talk to the real app through httpx's ASGITransport. The
       session dependency is overridden with an in-memory SQLite database
       (aiosqlite) created fresh per test, and object storage with an
       in-memory fake.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock session for pure unit tests
    ├── db_engine:         in-memory SQLite engine with every table created
    ├── db_session:        session on db_engine, seeded with reference rows
    ├── fake_storage:      InMemoryStorage recording stored objects
    ├── make_listing:      factory inserting Listing rows directly
    ├── sample_image_bytes
    └── test_client:       HTTPX AsyncClient wired to the overrides above
"""

import os
import tempfile
from typing import AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any listing_api imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="listing_api_test_")
os.environ["AUTH_BYPASS"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import listing_api.models  # noqa: F401
from listing_api.database import Base, get_db_session
from listing_api.models import Category, Listing, ListingType, Status, User
from listing_api.models.listing import listing_likes
from listing_api.services.storage import get_object_storage
from listing_api.services.storage_base import ObjectStorage


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

class InMemoryStorage(ObjectStorage):
    """ObjectStorage keeping objects in a dict; URLs use a fake CDN host."""

    BASE_URL = "https://cdn.test"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.public: set = set()
        self.fail_store = False
        self._counter = 0

    async def store(self, content, directory, filename, content_type=None):
        if self.fail_store:
            from listing_api.exceptions import StorageError
            raise StorageError(context={"reason": "simulated outage"})
        self._counter += 1
        ext = os.path.splitext(filename)[1].lower()
        path = f"{directory}/photo-{self._counter}{ext}"
        self.objects[path] = content
        return path

    async def set_public(self, path):
        self.public.add(path)

    def public_url(self, path):
        return f"{self.BASE_URL}/{path}"

    async def health_check(self):
        return True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    AsyncMock standing in for AsyncSession in unit tests.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    # StaticPool: one shared connection, so every session sees the same
    # in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite://",
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


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Session seeded with reference data:
        users:      1 alice, 2 bob, 3 carol
        categories: 1 Furniture, 2 Electronics
        types:      1 Sale, 2 Rent
        statuses:   1 active, 2 sold
    """
    async with session_factory() as session:
        session.add_all([
            User(id=1, name="alice", email="alice@example.com"),
            User(id=2, name="bob", email="bob@example.com"),
            User(id=3, name="carol", email="carol@example.com"),
            Category(id=1, name="Furniture"),
            Category(id=2, name="Electronics"),
            ListingType(id=1, name="Sale"),
            ListingType(id=2, name="Rent"),
            Status(id=1, name="active"),
            Status(id=2, name="sold"),
        ])
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def make_listing(db_session):
    """
    Factory inserting a listing directly (bypassing the API).

    Usage:
        listing_id = await make_listing(title="Desk", status_id=2, liked_by=[2, 3])
    """
    async def _make(
        title: str = "Oak desk",
        description: str = "Solid oak, minor scratches",
        user_id: int = 1,
        category_id: int = 1,
        type_id: int = 1,
        status_id: int = 1,
        photo: Optional[str] = None,
        liked_by: Optional[List[int]] = None,
    ) -> int:
        listing = Listing(
            title=title,
            description=description,
            user_id=user_id,
            category_id=category_id,
            type_id=type_id,
            status_id=status_id,
            photo=photo,
        )
        db_session.add(listing)
        await db_session.flush()
        if liked_by:
            await db_session.execute(
                listing_likes.insert(),
                [{"user_id": uid, "listing_id": listing.id} for uid in liked_by],
            )
        await db_session.commit()
        return listing.id

    return _make


@pytest.fixture
def fake_storage():
    return InMemoryStorage()


@pytest.fixture
def sample_image_bytes():
    """Smallest valid JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def test_client(session_factory, db_session, fake_storage):
    """
    HTTPX AsyncClient talking to the app with the test database and storage.

    raise_app_exceptions=False lets tests assert on the 500 body produced by
    the catch-all handler instead of receiving the re-raised exception.
    """
    from listing_api.main import app

    async def _test_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    app.dependency_overrides[get_object_storage] = lambda: fake_storage

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
