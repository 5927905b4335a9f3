import os

# Settings are read at import time, so the environment goes first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///./eventstay_test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

import eventstay.models  # noqa: E402, F401
from eventstay.database import Base, build_engine, get_db  # noqa: E402
from eventstay.main import app  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    """File-backed SQLite database, one per test."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'eventstay.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client talking to the app, with requests using the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()
