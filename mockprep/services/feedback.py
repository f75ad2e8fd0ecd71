from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mockprep.core.errors import NotFoundError, ValidationError
from mockprep.models.feedback import InterviewFeedback
from mockprep.services.booking_store import BookingStore

logger = logging.getLogger("mockprep.feedback")

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass
class CategoryScore:
    name: str
    score: int
    feedback: str = ""


@dataclass
class FeedbackRequest:
    interview_id: str
    user_id: str
    total_score: int
    category_scores: list[CategoryScore] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    areas_for_improvement: list[str] = field(default_factory=list)
    final_assessment: str = ""


def _check_score(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_SCORE <= value <= MAX_SCORE:
        raise ValidationError(field_name, f"{field_name} must be between {MIN_SCORE} and {MAX_SCORE}")
    return value


async def save_feedback(store: BookingStore, request: FeedbackRequest) -> int:
    """Store scored feedback; a second save by the same user replaces the first."""
    if not request.interview_id or not request.interview_id.strip():
        raise ValidationError("interview_id")
    if not request.user_id or not request.user_id.strip():
        raise ValidationError("user_id")
    interview_id = request.interview_id.strip()
    user_id = request.user_id.strip()

    total_score = _check_score(request.total_score, "total_score")
    categories = []
    for item in request.category_scores:
        if not item.name or not item.name.strip():
            raise ValidationError("category_scores", "category name is required")
        categories.append(
            {
                "name": item.name.strip(),
                "score": _check_score(item.score, "category_scores"),
                "feedback": item.feedback,
            }
        )

    interview = await store.get_interview(interview_id)
    if interview is None:
        raise NotFoundError(interview_id)

    feedback = await store.get_feedback(interview_id=interview_id, user_id=user_id)
    if feedback is None:
        feedback = InterviewFeedback(interview_id=interview_id, user_id=user_id)
    feedback.total_score = total_score
    feedback.category_scores = categories
    feedback.strengths = list(request.strengths)
    feedback.areas_for_improvement = list(request.areas_for_improvement)
    feedback.final_assessment = request.final_assessment

    feedback_id = await store.save_feedback(feedback)
    logger.info("feedback_saved", extra={"interview_id": interview_id, "user_id": user_id, "feedback_id": feedback_id})
    return feedback_id


async def get_feedback(store: BookingStore, *, interview_id: str, user_id: str) -> InterviewFeedback | None:
    if not interview_id or not interview_id.strip():
        raise ValidationError("interview_id")
    if not user_id or not user_id.strip():
        raise ValidationError("user_id")
    return await store.get_feedback(interview_id=interview_id.strip(), user_id=user_id.strip())
