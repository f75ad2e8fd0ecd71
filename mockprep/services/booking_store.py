from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mockprep.core.errors import SlotConflictError, StoreUnavailableError
from mockprep.models.feedback import InterviewFeedback
from mockprep.models.interview import Interview

logger = logging.getLogger("mockprep.store")


class BookingStore:
    """Document-style access to interview bookings over one database session.

    Every call re-queries the database. SQLAlchemy failures surface as
    ``StoreUnavailableError``; a duplicate slot key surfaces as
    ``SlotConflictError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _unavailable(self, operation: str, exc: SQLAlchemyError) -> StoreUnavailableError:
        logger.error("store_call_failed", extra={"operation": operation, "error": str(exc)})
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.exception("store_rollback_failed", extra={"operation": operation})
        return StoreUnavailableError(operation)

    async def _commit(self, operation: str, interview: Interview | None = None) -> None:
        # Read before commit: a rollback expires persistent instances.
        slot_key = interview.slot_key if interview is not None else None
        slot_time = interview.time if interview is not None else None
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if slot_key:
                raise SlotConflictError(slot_key.split("T", 1)[0], slot_time or "") from exc
            raise await self._unavailable(operation, exc) from exc
        except SQLAlchemyError as exc:
            raise await self._unavailable(operation, exc) from exc

    async def count_slot_bookings(self, *, start_at: datetime, end_at: datetime, time: str) -> int:
        stmt = select(func.count(Interview.interview_id)).where(
            Interview.slot_key.is_not(None),
            Interview.scheduled_date >= start_at,
            Interview.scheduled_date <= end_at,
            Interview.time == time,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise await self._unavailable("count_slot_bookings", exc) from exc
        return int(result.scalar() or 0)

    async def get_interview(self, interview_id: str) -> Interview | None:
        try:
            return await self.session.get(Interview, interview_id)
        except SQLAlchemyError as exc:
            raise await self._unavailable("get_interview", exc) from exc

    async def add_interview(self, interview: Interview) -> str:
        self.session.add(interview)
        await self._commit("add_interview", interview)
        return interview.interview_id

    async def save_interview(self, interview: Interview) -> None:
        self.session.add(interview)
        await self._commit("save_interview", interview)

    async def list_interviews_for_user(self, user_id: str) -> list[Interview]:
        stmt = (
            select(Interview)
            .where(Interview.user_id == user_id)
            .order_by(Interview.created_at.desc(), Interview.interview_id.desc())
        )
        try:
            rows = (await self.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise await self._unavailable("list_interviews_for_user", exc) from exc
        return list(rows)

    async def list_latest_finalized(self, *, exclude_user_id: str, limit: int) -> list[Interview]:
        stmt = (
            select(Interview)
            .where(Interview.finalized.is_(True), Interview.user_id != exclude_user_id)
            .order_by(Interview.created_at.desc(), Interview.interview_id.desc())
            .limit(limit)
        )
        try:
            rows = (await self.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise await self._unavailable("list_latest_finalized", exc) from exc
        return list(rows)

    async def get_feedback(self, *, interview_id: str, user_id: str) -> InterviewFeedback | None:
        stmt = select(InterviewFeedback).where(
            InterviewFeedback.interview_id == interview_id,
            InterviewFeedback.user_id == user_id,
        )
        try:
            return (await self.session.execute(stmt)).scalars().first()
        except SQLAlchemyError as exc:
            raise await self._unavailable("get_feedback", exc) from exc

    async def save_feedback(self, feedback: InterviewFeedback) -> int:
        """Insert or update one user's feedback.

        A concurrent first save for the same interview and user loses on the
        unique constraint; the row that won is then updated with these scores.
        """
        values = {
            "total_score": feedback.total_score,
            "category_scores": feedback.category_scores,
            "strengths": feedback.strengths,
            "areas_for_improvement": feedback.areas_for_improvement,
            "final_assessment": feedback.final_assessment,
        }
        interview_id, user_id = feedback.interview_id, feedback.user_id
        self.session.add(feedback)
        try:
            await self.session.commit()
            return feedback.feedback_id
        except IntegrityError as exc:
            await self.session.rollback()
            existing = await self.get_feedback(interview_id=interview_id, user_id=user_id)
            if existing is None:
                raise await self._unavailable("save_feedback", exc) from exc
        except SQLAlchemyError as exc:
            raise await self._unavailable("save_feedback", exc) from exc

        logger.info(
            "feedback_insert_lost_race",
            extra={"interview_id": interview_id, "user_id": user_id, "feedback_id": existing.feedback_id},
        )
        for key, value in values.items():
            setattr(existing, key, value)
        await self._commit("save_feedback")
        return existing.feedback_id
