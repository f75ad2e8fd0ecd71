from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from mockprep.api import deps
from mockprep.core.config import settings
from mockprep.core.time_grid import list_slot_labels
from mockprep.schemas.slots import InterviewSlotOut, SlotAvailabilityOut
from mockprep.schemas.user import UserContext
from mockprep.services.booking_store import BookingStore
from mockprep.services.scheduling import is_available, list_slots_for_date

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/labels", response_model=list[str])
async def get_slot_labels():
    return list(list_slot_labels())


@router.get("", response_model=list[InterviewSlotOut])
async def get_slots_for_date(
    day: date = Query(alias="date"),
    store: BookingStore = Depends(deps.get_booking_store),
    _user: UserContext = Depends(deps.get_user),
):
    slots = await list_slots_for_date(store, day, tz=settings.schedule_tz)
    return [InterviewSlotOut(date=slot.date, time=slot.time, available=slot.available) for slot in slots]


@router.get("/availability", response_model=SlotAvailabilityOut)
async def get_slot_availability(
    day: date = Query(alias="date"),
    time: str = Query(min_length=1, max_length=5),
    store: BookingStore = Depends(deps.get_booking_store),
    _user: UserContext = Depends(deps.get_user),
):
    available = await is_available(store, day, time, tz=settings.schedule_tz)
    return SlotAvailabilityOut(date=day, time=time, available=available)
