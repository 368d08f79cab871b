"""
Shared fixtures: an in-memory SQLite database per test, service-level sessions
and an HTTP client wired to the FastAPI app.
"""

import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENABLE_CACHE"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.category import Category
from app.models.slider import Slider
from app.models.user import User
from app.routes.auth import get_current_admin_user
from app.services.ordering import placement_of, sibling_filter


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


def _override_db(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session
    return override_get_db


@pytest_asyncio.fixture
async def client(session_maker):
    """Client whose requests are authenticated as an admin"""
    app.dependency_overrides[get_db] = _override_db(session_maker)
    app.dependency_overrides[get_current_admin_user] = lambda: User(
        id=1, email="admin@example.com", is_active=True, is_admin=True
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def anon_client(session_maker):
    """Client with real authentication dependencies"""
    app.dependency_overrides[get_db] = _override_db(session_maker)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def group_orders(db):
    """Read {id: order} for one category sibling group straight from the table"""
    async def read(parent_id=None):
        result = await db.execute(
            select(Category.id, Category.order)
            .where(sibling_filter(placement_of(parent_id)))
            .order_by(Category.order, Category.id)
        )
        return {row.id: row.order for row in result.all()}
    return read


@pytest.fixture
def slider_orders(db):
    async def read():
        result = await db.execute(select(Slider.id, Slider.order).order_by(Slider.id))
        return {row.id: row.order for row in result.all()}
    return read
