from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mockprep.core.auth import get_current_user
from mockprep.db.session import get_session
from mockprep.schemas.user import UserContext
from mockprep.services.booking_store import BookingStore


async def get_db_session() -> AsyncSession:
    async for session in get_session():
        yield session


async def get_booking_store(session: AsyncSession = Depends(get_db_session)) -> BookingStore:
    return BookingStore(session)


async def get_user(user: UserContext = Depends(get_current_user)) -> UserContext:
    return user
