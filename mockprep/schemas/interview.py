import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class InterviewScheduleIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    date: dt.date
    time: str = Field(min_length=1, max_length=5)
    user_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    questions: Optional[List[str]] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=480)
    platform: Optional[str] = Field(default=None, max_length=100)
    finalized: Optional[bool] = None


class InterviewGenerateIn(BaseModel):
    user_id: str = Field(min_length=1, max_length=128)
    user_name: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=255)
    questions: List[str] = Field(default_factory=list)
    interview_type: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    selected_date: Optional[str] = Field(default=None, max_length=32)
    selected_time: Optional[str] = Field(default=None, max_length=16)
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=480)
    platform: Optional[str] = Field(default=None, max_length=100)
    finalized: Optional[bool] = None


class InterviewUpdate(BaseModel):
    user_name: Optional[str] = Field(default=None, max_length=255)
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    questions: Optional[List[str]] = None
    interview_type: Optional[str] = Field(default=None, max_length=100)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, max_length=5)
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=480)
    platform: Optional[str] = Field(default=None, max_length=100)
    finalized: Optional[bool] = None


class InterviewCreatedOut(BaseModel):
    interview_id: str


class InterviewOut(BaseModel):
    interview_id: str
    user_id: str
    user_name: str
    title: str
    description: Optional[str] = None
    questions: Optional[List[str]] = None
    interview_type: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    platform: Optional[str] = None
    selected_date: Optional[str] = None
    selected_time: Optional[str] = None
    finalized: bool
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None
