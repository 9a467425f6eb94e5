"""
Core pytest configuration for the entire test suite.

Only the database setup and app wiring needed across every kind of test lives
here. Domain fixtures (sample forms, fake uploads, repositories, services) are
in tests/test_fixtures/ and re-exported at the bottom of this module.
"""
import logging
from typing import AsyncGenerator

# Silence noisy third-party loggers before importing modules that initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pack.config.settings import Settings, get_settings
from pack.database.base import Base
from pack.database.session import get_async_session
import pack.models  # noqa: F401  (registers every table on Base.metadata)

# One in-memory database per test: StaticPool keeps the single connection alive
# so every session of the test sees the same schema and rows.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """
    Session used directly by repository/service tests. The service commits, so
    isolation comes from the per-test database rather than a rolled-back transaction.
    """
    async with session_maker() as session:
        yield session


# ------------------------------------------------------------------------------------------------
# APP FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        ENV="testing",
        DATABASE_URL_OVERRIDE=TEST_DATABASE_URL,
        CREATE_SCHEMA_ON_STARTUP=False,
        LOG_TO_STDOUT=True,
        MAX_FILE_SIZE="1MB",
        MAX_REQUEST_SIZE="2MB",
    )


@pytest.fixture()
def app(session_maker, test_settings):
    """
    Application wired to the per-test database; every request gets its own session.
    """
    from pack.main import create_app

    app = create_app(test_settings)

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest.fixture()
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# Domain fixtures
from .test_fixtures.resource_fixtures import (  # noqa: E402,F401
    make_upload,
    resource_form,
    resource_repository,
    attachment_repository,
    resource_service,
    resource_facade,
)
