from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from mockprep.api import deps
from mockprep.core.config import settings
from mockprep.models.interview import Interview
from mockprep.schemas.interview import (
    InterviewCreatedOut,
    InterviewGenerateIn,
    InterviewOut,
    InterviewScheduleIn,
    InterviewUpdate,
)
from mockprep.schemas.user import UserContext
from mockprep.services.booking_store import BookingStore
from mockprep.services.interviews import (
    DEFAULT_LATEST_LIMIT,
    MAX_LATEST_LIMIT,
    get_interview,
    list_interviews_for_user,
    list_latest_interviews,
)
from mockprep.services.scheduling import (
    BookingRequest,
    GeneratedInterviewRequest,
    booked_day,
    create_generated_interview,
    finalize_interview,
    schedule_interview,
    update_interview,
)

router = APIRouter(prefix="/interviews", tags=["interviews"])
internal_router = APIRouter(prefix="/internal/interviews", tags=["interviews-internal"])


def _build_interview_out(interview: Interview) -> InterviewOut:
    return InterviewOut(
        interview_id=interview.interview_id,
        user_id=interview.user_id,
        user_name=interview.user_name,
        title=interview.title,
        description=interview.description,
        questions=interview.questions,
        interview_type=interview.interview_type,
        date=booked_day(interview),
        time=interview.time,
        duration_minutes=interview.duration_minutes,
        platform=interview.platform,
        selected_date=interview.selected_date,
        selected_time=interview.selected_time,
        finalized=bool(interview.finalized),
        created_at=interview.created_at,
        updated_at=interview.updated_at,
    )


async def _load_owned_interview(store: BookingStore, interview_id: str, user: UserContext) -> Interview:
    interview = await get_interview(store, interview_id)
    if not interview:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
    if interview.user_id != user.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return interview


@router.post("/schedule", response_model=InterviewCreatedOut, status_code=status.HTTP_201_CREATED)
async def schedule(
    payload: InterviewScheduleIn,
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    interview_id = await schedule_interview(
        store,
        BookingRequest(
            user_id=user.user_id,
            user_name=payload.user_name or user.user_name,
            title=payload.title,
            date=payload.date,
            time=payload.time,
            description=payload.description,
            questions=payload.questions,
            duration_minutes=payload.duration_minutes,
            platform=payload.platform,
            finalized=payload.finalized,
        ),
        tz=settings.schedule_tz,
    )
    return InterviewCreatedOut(interview_id=interview_id)


@router.get("/me", response_model=list[InterviewOut])
async def list_my_interviews(
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    interviews = await list_interviews_for_user(store, user.user_id)
    return [_build_interview_out(interview) for interview in interviews]


@router.get("/latest", response_model=list[InterviewOut])
async def list_latest(
    limit: int = Query(default=DEFAULT_LATEST_LIMIT, ge=1, le=MAX_LATEST_LIMIT),
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    interviews = await list_latest_interviews(store, user_id=user.user_id, limit=limit)
    return [_build_interview_out(interview) for interview in interviews]


@router.get("/{interview_id}", response_model=InterviewOut)
async def read_interview(
    interview_id: str,
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    interview = await get_interview(store, interview_id)
    if not interview:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
    # Finalized interviews are listed publicly via /latest; drafts stay private.
    if interview.user_id != user.user_id and not interview.finalized:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return _build_interview_out(interview)


@router.patch("/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
async def patch_interview(
    interview_id: str,
    payload: InterviewUpdate,
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    await _load_owned_interview(store, interview_id, user)
    await update_interview(store, interview_id, payload.model_dump(exclude_unset=True), tz=settings.schedule_tz)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{interview_id}/finalize", status_code=status.HTTP_204_NO_CONTENT)
async def finalize(
    interview_id: str,
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    await _load_owned_interview(store, interview_id, user)
    await finalize_interview(store, interview_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@internal_router.post("/generate", response_model=InterviewCreatedOut, status_code=status.HTTP_201_CREATED)
async def generate(
    payload: InterviewGenerateIn,
    store: BookingStore = Depends(deps.get_booking_store),
):
    interview_id = await create_generated_interview(
        store,
        GeneratedInterviewRequest(
            user_id=payload.user_id,
            user_name=payload.user_name,
            title=payload.title,
            questions=payload.questions,
            interview_type=payload.interview_type,
            description=payload.description,
            selected_date=payload.selected_date,
            selected_time=payload.selected_time,
            duration_minutes=payload.duration_minutes,
            platform=payload.platform,
            finalized=payload.finalized,
        ),
    )
    return InterviewCreatedOut(interview_id=interview_id)
