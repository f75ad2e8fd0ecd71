from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import OperationalError

from mockprep.core.errors import InvalidSlotError, StoreUnavailableError, ValidationError
from mockprep.core.time_grid import list_slot_labels
from mockprep.services.scheduling import BookingRequest, is_available, list_slots_for_date, schedule_interview

UTC = ZoneInfo("UTC")


def make_request(day, time="09:00", **overrides) -> BookingRequest:
    values = dict(
        user_id="user-1",
        user_name="User One",
        title="Mock system design",
        date=day,
        time=time,
    )
    values.update(overrides)
    return BookingRequest(**values)


@pytest.mark.asyncio
async def test_empty_day_is_fully_available(store):
    for label in list_slot_labels():
        assert await is_available(store, date(2025, 6, 1), label, tz=UTC) is True


@pytest.mark.asyncio
async def test_slot_unavailable_after_scheduling(store):
    await schedule_interview(store, make_request(date(2025, 6, 1), "13:00"), tz=UTC)

    assert await is_available(store, date(2025, 6, 1), "13:00", tz=UTC) is False
    assert await is_available(store, date(2025, 6, 1), "15:00", tz=UTC) is True
    assert await is_available(store, date(2025, 6, 2), "13:00", tz=UTC) is True


@pytest.mark.asyncio
async def test_midnight_boundary_bookings_land_on_different_days(store):
    await schedule_interview(store, make_request(datetime(2025, 6, 1, 23, 59, 59, 999000), "09:00"), tz=UTC)
    await schedule_interview(store, make_request(datetime(2025, 6, 2, 0, 0, 0), "09:00"), tz=UTC)

    assert await is_available(store, date(2025, 6, 1), "09:00", tz=UTC) is False
    assert await is_available(store, date(2025, 6, 2), "09:00", tz=UTC) is False
    assert await is_available(store, date(2025, 6, 3), "09:00", tz=UTC) is True


@pytest.mark.asyncio
async def test_configured_zone_is_used_on_read_and_write(store):
    new_york = ZoneInfo("America/New_York")
    # 02:00 UTC on June 2nd is still June 1st in New York.
    await schedule_interview(
        store,
        make_request(datetime(2025, 6, 2, 2, 0, tzinfo=timezone.utc), "11:00"),
        tz=new_york,
    )

    assert await is_available(store, date(2025, 6, 1), "11:00", tz=new_york) is False
    assert await is_available(store, date(2025, 6, 2), "11:00", tz=new_york) is True


@pytest.mark.asyncio
async def test_unknown_label_is_rejected(store):
    with pytest.raises(InvalidSlotError):
        await is_available(store, date(2025, 6, 1), "10:00", tz=UTC)


@pytest.mark.asyncio
async def test_missing_date_is_rejected(store):
    with pytest.raises(ValidationError) as exc_info:
        await is_available(store, None, "09:00", tz=UTC)
    assert exc_info.value.field == "date"


@pytest.mark.asyncio
async def test_store_failure_is_not_reported_as_available(store, db_session, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "execute", broken_execute)

    with pytest.raises(StoreUnavailableError):
        await is_available(store, date(2025, 6, 1), "09:00", tz=UTC)


@pytest.mark.asyncio
async def test_enumeration_returns_every_label_in_order(store):
    for day in (date.today(), date(2099, 12, 31), date(2025, 6, 1)):
        slots = await list_slots_for_date(store, day, tz=UTC)
        assert [slot.time for slot in slots] == list(list_slot_labels())
        assert all(slot.date == day for slot in slots)
        assert all(slot.available for slot in slots)


@pytest.mark.asyncio
async def test_enumeration_reflects_bookings(store):
    await schedule_interview(store, make_request(date(2025, 6, 1), "15:00"), tz=UTC)

    slots = await list_slots_for_date(store, date(2025, 6, 1), tz=UTC)

    assert {slot.time: slot.available for slot in slots} == {
        "09:00": True,
        "11:00": True,
        "13:00": True,
        "15:00": False,
        "17:00": True,
    }


@pytest.mark.asyncio
async def test_enumeration_is_idempotent_without_writes(store):
    await schedule_interview(store, make_request(date(2025, 6, 1), "09:00"), tz=UTC)

    first = await list_slots_for_date(store, date(2025, 6, 1), tz=UTC)
    second = await list_slots_for_date(store, date(2025, 6, 1), tz=UTC)

    assert first == second


@pytest.mark.asyncio
async def test_enumeration_marks_failed_checks_unavailable(store, monkeypatch):
    original = store.count_slot_bookings

    async def flaky_count(*, start_at, end_at, time):
        if time == "11:00":
            raise StoreUnavailableError("count_slot_bookings")
        return await original(start_at=start_at, end_at=end_at, time=time)

    monkeypatch.setattr(store, "count_slot_bookings", flaky_count)

    slots = await list_slots_for_date(store, date(2025, 6, 1), tz=UTC)

    assert len(slots) == len(list_slot_labels())
    assert {slot.time: slot.available for slot in slots} == {
        "09:00": True,
        "11:00": False,
        "13:00": True,
        "15:00": True,
        "17:00": True,
    }


@pytest.mark.asyncio
async def test_enumeration_survives_full_store_outage(store, db_session, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "execute", broken_execute)

    slots = await list_slots_for_date(store, date(2025, 6, 1), tz=UTC)

    assert [slot.time for slot in slots] == list(list_slot_labels())
    assert not any(slot.available for slot in slots)
