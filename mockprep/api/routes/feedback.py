from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from mockprep.api import deps
from mockprep.models.feedback import InterviewFeedback
from mockprep.schemas.feedback import CategoryScoreIn, FeedbackCreatedOut, FeedbackIn, FeedbackOut
from mockprep.schemas.user import UserContext
from mockprep.services.booking_store import BookingStore
from mockprep.services.feedback import CategoryScore, FeedbackRequest, get_feedback, save_feedback

router = APIRouter(prefix="/interviews", tags=["feedback"])
internal_router = APIRouter(prefix="/internal/interviews", tags=["feedback-internal"])


def _build_feedback_out(feedback: InterviewFeedback) -> FeedbackOut:
    return FeedbackOut(
        feedback_id=feedback.feedback_id,
        interview_id=feedback.interview_id,
        user_id=feedback.user_id,
        total_score=feedback.total_score,
        category_scores=[CategoryScoreIn(**item) for item in feedback.category_scores or []],
        strengths=list(feedback.strengths or []),
        areas_for_improvement=list(feedback.areas_for_improvement or []),
        final_assessment=feedback.final_assessment or "",
        created_at=feedback.created_at,
    )


@router.get("/{interview_id}/feedback", response_model=FeedbackOut)
async def read_feedback(
    interview_id: str,
    store: BookingStore = Depends(deps.get_booking_store),
    user: UserContext = Depends(deps.get_user),
):
    feedback = await get_feedback(store, interview_id=interview_id, user_id=user.user_id)
    if not feedback:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return _build_feedback_out(feedback)


@internal_router.post("/{interview_id}/feedback", response_model=FeedbackCreatedOut, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    interview_id: str,
    payload: FeedbackIn,
    store: BookingStore = Depends(deps.get_booking_store),
):
    feedback_id = await save_feedback(
        store,
        FeedbackRequest(
            interview_id=interview_id,
            user_id=payload.user_id,
            total_score=payload.total_score,
            category_scores=[
                CategoryScore(name=item.name, score=item.score, feedback=item.feedback)
                for item in payload.category_scores
            ],
            strengths=payload.strengths,
            areas_for_improvement=payload.areas_for_improvement,
            final_assessment=payload.final_assessment,
        ),
    )
    return FeedbackCreatedOut(feedback_id=feedback_id)
