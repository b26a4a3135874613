"""Root conftest — shared test configuration and database/app fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the full schema
    - get_db and get_email_client overridden; no real provider is ever called
    - db_manager patched so readiness checks hit the test engine
    - Logging initialised once per session through the app's own setup_logging

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the unique email constraint
    - FakeEmailClient records every call and can be armed with an error to raise
"""

import logging
import os
import sys

# Ensure tests don't accidentally talk to real services
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("EMAIL_BASE_URL", "http://email.test.invalid")
os.environ.setdefault("EMAIL_SENDER", "newsletter@zero2prod.com")
os.environ.setdefault("EMAIL_AUTHORIZATION_TOKEN", "test-token")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from newsletter.db.base import Base  # noqa: E402
import newsletter.models  # noqa: E402,F401
import newsletter.infrastructure.database as db_module  # noqa: E402
from newsletter.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from newsletter.infrastructure.email_client import get_email_client  # noqa: E402
from newsletter.infrastructure.observability import setup_logging  # noqa: E402
from newsletter.main import app  # noqa: E402
from tests.fake_email import FakeEmailClient  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _test_logging():
    """Initialise logging once per run; TEST_LOG=1 sends it to stdout."""
    if os.environ.get("TEST_LOG"):
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.NullHandler()
    setup_logging(handler=handler)
    return handler

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_email_client():
    return FakeEmailClient()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_email_client):
    """FastAPI test client with DB and email client dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_client] = lambda: fake_email_client

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
