import os

os.environ.setdefault("MP_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MP_AUTH_MODE", "dev")
os.environ.setdefault("MP_SCHEDULE_TIMEZONE", "UTC")
os.environ.setdefault("MP_SCHEDULE_RATE_LIMIT_PER_MIN", "1000")
os.environ.setdefault("MP_INTERNAL_API_KEY", "")

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mockprep.models import Base
from mockprep.services.booking_store import BookingStore


@pytest.fixture()
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine):
    session_factory = async_sessionmaker(bind=async_engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture()
def store(db_session):
    return BookingStore(db_session)
