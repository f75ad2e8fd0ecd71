from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class CategoryScoreIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    score: int = Field(ge=0, le=100)
    feedback: str = ""


class FeedbackIn(BaseModel):
    user_id: str = Field(min_length=1, max_length=128)
    total_score: int = Field(ge=0, le=100)
    category_scores: List[CategoryScoreIn] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    final_assessment: str = ""


class FeedbackCreatedOut(BaseModel):
    feedback_id: int


class FeedbackOut(BaseModel):
    feedback_id: int
    interview_id: str
    user_id: str
    total_score: int
    category_scores: List[CategoryScoreIn]
    strengths: List[str]
    areas_for_improvement: List[str]
    final_assessment: str
    created_at: datetime
