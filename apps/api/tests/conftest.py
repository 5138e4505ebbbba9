"""Pytest configuration and fixtures."""

import os

# Point settings at SQLite before any playbook module builds the engine.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from playbook.core.config import Settings
from playbook.db.models import User
from playbook.db.session import Base
from playbook.repositories import PickupLineRepository, TagRepository, UserRepository
from playbook.search import ElasticSearchWrapper, SearchResultMapper
from playbook.services import PickupLineService, TagService, UserService
from tests.fakes import FakeElasticsearch


@pytest.fixture
def settings() -> Settings:
    """Provide settings with fixed index names and page size."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        pickup_line_index_name="test-pickup-lines",
        tag_index_name="test-tags",
        user_index_name="test-users",
        items_per_page=10,
    )


@pytest.fixture
async def engine():
    """Provide an in-memory SQLite engine with the schema created and FKs enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncSession:
    """Provide a session on the per-test in-memory engine."""
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def search_client() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def search(db, search_client, settings) -> ElasticSearchWrapper:
    mapper = SearchResultMapper(TagRepository(db), PickupLineRepository(db))
    return ElasticSearchWrapper(search_client, mapper, settings)


@pytest.fixture
def pickup_line_service(db, search) -> PickupLineService:
    return PickupLineService(PickupLineRepository(db), TagRepository(db), search)


@pytest.fixture
def tag_service(db, search) -> TagService:
    return TagService(TagRepository(db), search)


@pytest.fixture
def user_service(db, search) -> UserService:
    return UserService(UserRepository(db), search)


async def make_user(db, username: str, display_name: str | None = None) -> User:
    user = User(username=username, display_name=display_name or username, hashed_password="x")
    return await UserRepository(db).create(user)


@pytest.fixture
async def alice(db) -> User:
    return await make_user(db, "alice@example.com", "Alice")


@pytest.fixture
async def bob(db) -> User:
    return await make_user(db, "bob@example.com", "Bob")
