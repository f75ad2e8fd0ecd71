from __future__ import annotations

from mockprep.core.errors import ValidationError
from mockprep.models.interview import Interview
from mockprep.services.booking_store import BookingStore

DEFAULT_LATEST_LIMIT = 20
MAX_LATEST_LIMIT = 100


async def get_interview(store: BookingStore, interview_id: str) -> Interview | None:
    if not interview_id or not interview_id.strip():
        raise ValidationError("interview_id")
    return await store.get_interview(interview_id.strip())


async def list_interviews_for_user(store: BookingStore, user_id: str) -> list[Interview]:
    if not user_id or not user_id.strip():
        raise ValidationError("user_id")
    return await store.list_interviews_for_user(user_id.strip())


async def list_latest_interviews(
    store: BookingStore,
    *,
    user_id: str,
    limit: int = DEFAULT_LATEST_LIMIT,
) -> list[Interview]:
    """Finalized interviews of other users, newest first."""
    if not user_id or not user_id.strip():
        raise ValidationError("user_id")
    if limit <= 0 or limit > MAX_LATEST_LIMIT:
        raise ValidationError("limit", f"limit must be between 1 and {MAX_LATEST_LIMIT}")
    return await store.list_latest_finalized(exclude_user_id=user_id.strip(), limit=limit)
