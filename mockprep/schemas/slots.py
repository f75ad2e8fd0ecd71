import datetime as dt

from pydantic import BaseModel


class InterviewSlotOut(BaseModel):
    date: dt.date
    time: str
    available: bool


class SlotAvailabilityOut(BaseModel):
    date: dt.date
    time: str
    available: bool
