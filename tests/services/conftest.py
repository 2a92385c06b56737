"""Service test fixtures — async DB, repositories, handler context and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - file_factory gives separate connections per session (temp-file SQLite) for
      tests that need two concurrent writers
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - Roles Admin, Owner, User are seeded like the initial migration does

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - create_engine from infrastructure.database: same FK pragma as production sqlite
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from httpx import ASGITransport, AsyncClient

from restaurants.core.domain_types import UserRole
from restaurants.db.base import Base
from restaurants.infrastructure.database import (
    DatabaseSessionManager, create_engine, get_db,
)
import restaurants.infrastructure.database as db_module
from restaurants.infrastructure.dish_repository import SqlDishRepository
from restaurants.infrastructure.restaurant_repository import SqlRestaurantRepository
from restaurants.infrastructure.user_store import SqlUserStore
from restaurants.main import app
from restaurants.models.user import Role, User
from restaurants.services.handler_context import HandlerContext


@pytest.fixture
async def test_engine():
    engine = create_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        session.add_all([Role(name=r.value) for r in UserRole])
        await session.commit()
    return factory


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def handler_context(test_db):
    """HandlerContext over the real SQL gateways, anonymous caller."""
    return HandlerContext(
        restaurants=SqlRestaurantRepository(test_db),
        dishes=SqlDishRepository(test_db),
        users=SqlUserStore(test_db),
    )


@pytest.fixture
async def seed_user(test_db):
    user = User(email="owner@chipotle.com", roles=[])
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def file_factory(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'restaurants.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
