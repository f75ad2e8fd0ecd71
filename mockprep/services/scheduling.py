from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from mockprep.core.config import settings
from mockprep.core.datetime_utils import day_window, now_utc_naive
from mockprep.core.errors import NotFoundError, SlotConflictError, StoreUnavailableError, ValidationError
from mockprep.core.time_grid import list_slot_labels, require_slot_label
from mockprep.models.interview import Interview
from mockprep.services.booking_store import BookingStore

logger = logging.getLogger("mockprep.scheduling")

IMMUTABLE_FIELDS = frozenset({"interview_id", "user_id", "created_at", "updated_at", "slot_key"})
UPDATABLE_FIELDS = frozenset(
    {
        "user_name",
        "title",
        "description",
        "questions",
        "interview_type",
        "duration_minutes",
        "platform",
        "finalized",
        "date",
        "time",
    }
)


@dataclass
class InterviewSlot:
    date: date
    time: str
    available: bool


@dataclass
class BookingRequest:
    user_id: str | None
    user_name: str | None
    title: str | None
    date: date | datetime | None
    time: str | None
    description: str | None = None
    questions: list[str] | None = None
    duration_minutes: int | None = None
    platform: str | None = None
    finalized: bool | None = None


@dataclass
class GeneratedInterviewRequest:
    user_id: str | None
    user_name: str | None
    title: str | None
    questions: list[str] | None = None
    interview_type: str | None = None
    description: str | None = None
    selected_date: str | None = None
    selected_time: str | None = None
    duration_minutes: int | None = None
    platform: str | None = None
    finalized: bool | None = None


def _zone(tz: ZoneInfo | None) -> ZoneInfo:
    return tz or settings.schedule_tz


def build_slot_key(day: date, time: str) -> str:
    return f"{day.isoformat()}T{time}"


def booked_day(interview: Interview) -> date | None:
    """Calendar day of a slot booking, as bucketed when it was written."""
    if not interview.slot_key:
        return None
    return date.fromisoformat(interview.slot_key.split("T", 1)[0])


def _require_text(value: Any, field: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(field)
    return value.strip()


def _require_day(value: Any, field: str = "date") -> date | datetime:
    if value is None:
        raise ValidationError(field)
    if not isinstance(value, date):
        raise ValidationError(field, f"{field} must be a date")
    return value


def _require_slot(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("time")
    return require_slot_label(value)


def _clean_duration(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError("duration_minutes", "duration_minutes must be a positive integer")
    return value


def _clean_questions(value: Any) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError("questions", "questions must be a list of strings")
    cleaned = [str(item).strip() for item in value if str(item).strip()]
    return cleaned


async def is_available(
    store: BookingStore,
    day: date | datetime | None,
    time: str | None,
    *,
    tz: ZoneInfo | None = None,
) -> bool:
    _require_day(day)
    label = _require_slot(time)
    window = day_window(day, _zone(tz))
    count = await store.count_slot_bookings(start_at=window.start_at, end_at=window.end_at, time=label)
    return count == 0


async def list_slots_for_date(
    store: BookingStore,
    day: date | datetime | None,
    *,
    tz: ZoneInfo | None = None,
) -> list[InterviewSlot]:
    _require_day(day)
    zone = _zone(tz)
    calendar_day = day_window(day, zone).day

    slots: list[InterviewSlot] = []
    for label in list_slot_labels():
        try:
            available = await is_available(store, calendar_day, label, tz=zone)
        except StoreUnavailableError as exc:
            # Unknown state is shown as taken, never as free.
            logger.warning(
                "slot_check_failed",
                extra={"slot_date": calendar_day.isoformat(), "slot_time": label, "operation": exc.operation},
            )
            available = False
        slots.append(InterviewSlot(date=calendar_day, time=label, available=available))
    return slots


async def schedule_interview(
    store: BookingStore,
    request: BookingRequest,
    *,
    tz: ZoneInfo | None = None,
) -> str:
    user_id = _require_text(request.user_id, "user_id")
    user_name = _require_text(request.user_name, "user_name")
    title = _require_text(request.title, "title")
    day = _require_day(request.date)
    label = _require_slot(request.time)
    duration = _clean_duration(request.duration_minutes)
    questions = _clean_questions(request.questions)

    zone = _zone(tz)
    window = day_window(day, zone)
    if not await is_available(store, window.day, label, tz=zone):
        logger.info("slot_conflict", extra={"slot_date": window.day.isoformat(), "slot_time": label, "user_id": user_id})
        raise SlotConflictError(window.day, label)

    now = now_utc_naive()
    interview = Interview(
        user_id=user_id,
        user_name=user_name,
        title=title,
        description=request.description,
        questions=questions,
        scheduled_date=window.start_at,
        time=label,
        slot_key=build_slot_key(window.day, label),
        duration_minutes=duration or settings.default_duration_minutes,
        platform=request.platform,
        finalized=True if request.finalized is None else bool(request.finalized),
        created_at=now,
        updated_at=now,
    )
    interview_id = await store.add_interview(interview)
    logger.info(
        "interview_scheduled",
        extra={"interview_id": interview_id, "user_id": user_id, "slot_date": window.day.isoformat(), "slot_time": label},
    )
    return interview_id


async def create_generated_interview(store: BookingStore, request: GeneratedInterviewRequest) -> str:
    """Persist an interview produced by the question-generation flow.

    Not slot based: ``selected_date``/``selected_time`` are kept as metadata and
    no availability check runs. Starts as pending unless told otherwise.
    """
    user_id = _require_text(request.user_id, "user_id")
    user_name = _require_text(request.user_name, "user_name")
    title = _require_text(request.title, "title")

    now = now_utc_naive()
    interview = Interview(
        user_id=user_id,
        user_name=user_name,
        title=title,
        description=request.description,
        questions=_clean_questions(request.questions),
        interview_type=request.interview_type,
        selected_date=request.selected_date,
        selected_time=request.selected_time,
        duration_minutes=_clean_duration(request.duration_minutes),
        platform=request.platform,
        finalized=False if request.finalized is None else bool(request.finalized),
        created_at=now,
        updated_at=now,
    )
    interview_id = await store.add_interview(interview)
    logger.info("interview_generated", extra={"interview_id": interview_id, "user_id": user_id})
    return interview_id


async def _move_slot(
    store: BookingStore,
    interview: Interview,
    *,
    new_day: Any,
    new_time: Any,
    zone: ZoneInfo,
) -> None:
    if not interview.slot_key:
        raise ValidationError(
            "date" if new_day is not None else "time",
            "generated interviews are not slot bookings",
        )
    current_day = booked_day(interview)
    day = current_day if new_day is None else _require_day(new_day)
    label = interview.time if new_time is None else _require_slot(new_time)

    window = day_window(day, zone)
    slot_key = build_slot_key(window.day, label)
    if slot_key == interview.slot_key:
        return
    if not await is_available(store, window.day, label, tz=zone):
        raise SlotConflictError(window.day, label)

    interview.scheduled_date = window.start_at
    interview.time = label
    interview.slot_key = slot_key


async def update_interview(
    store: BookingStore,
    interview_id: str,
    changes: Mapping[str, Any],
    *,
    tz: ZoneInfo | None = None,
) -> None:
    interview_id = _require_text(interview_id, "interview_id")
    interview = await store.get_interview(interview_id)
    if interview is None:
        raise NotFoundError(interview_id)

    values = {key: value for key, value in changes.items() if key not in IMMUTABLE_FIELDS}
    ignored = sorted(set(changes) - set(values))
    if ignored:
        logger.info("immutable_fields_ignored", extra={"interview_id": interview_id, "fields": ignored})

    unknown = sorted(set(values) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], f"{unknown[0]} cannot be updated")

    for field in ("user_name", "title"):
        if field in values:
            values[field] = _require_text(values[field], field)
    if "duration_minutes" in values:
        values["duration_minutes"] = _clean_duration(values["duration_minutes"])
    if "questions" in values:
        values["questions"] = _clean_questions(values["questions"])
    if "finalized" in values:
        finalized = values["finalized"]
        if not isinstance(finalized, bool):
            raise ValidationError("finalized", "finalized must be a boolean")
        if interview.finalized and not finalized:
            raise ValidationError("finalized", "finalized interviews cannot be reopened")

    if "date" in values or "time" in values:
        await _move_slot(
            store,
            interview,
            new_day=values.pop("date", None),
            new_time=values.pop("time", None),
            zone=_zone(tz),
        )

    for key, value in values.items():
        setattr(interview, key, value)
    interview.updated_at = now_utc_naive()

    await store.save_interview(interview)
    logger.info("interview_updated", extra={"interview_id": interview_id, "fields": sorted(values)})


async def finalize_interview(store: BookingStore, interview_id: str) -> None:
    await update_interview(store, interview_id, {"finalized": True})
