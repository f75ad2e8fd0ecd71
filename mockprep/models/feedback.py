from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mockprep.core.datetime_utils import now_utc_naive
from mockprep.db.base import Base


class InterviewFeedback(Base):
    __tablename__ = "mp_feedback"
    __table_args__ = (UniqueConstraint("interview_id", "user_id", name="uq_mp_feedback_interview_user"),)

    feedback_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    interview_id: Mapped[str] = mapped_column(ForeignKey("mp_interview.interview_id"), index=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True)

    total_score: Mapped[int] = mapped_column(Integer)
    category_scores: Mapped[list] = mapped_column(JSON, default=list)
    strengths: Mapped[list] = mapped_column(JSON, default=list)
    areas_for_improvement: Mapped[list] = mapped_column(JSON, default=list)
    final_assessment: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive)
