from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mockprep.core.datetime_utils import now_utc_naive
from mockprep.db.base import Base


def new_interview_id() -> str:
    return uuid4().hex


class Interview(Base):
    __tablename__ = "mp_interview"
    __table_args__ = (Index("ix_mp_interview_slot", "scheduled_date", "time"),)

    interview_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_interview_id)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    user_name: Mapped[str] = mapped_column(String(255))
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    questions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    interview_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Local midnight of the booked calendar day, stored as naive UTC.
    scheduled_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    # "<YYYY-MM-DD>T<HH:MM>" for slot bookings; NULL for generated interviews.
    slot_key: Mapped[str | None] = mapped_column(String(16), unique=True, nullable=True)

    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    platform: Mapped[str | None] = mapped_column(String(100), nullable=True)

    selected_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    selected_time: Mapped[str | None] = mapped_column(String(16), nullable=True)

    finalized: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
