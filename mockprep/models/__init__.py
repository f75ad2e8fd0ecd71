from mockprep.db.base import Base
from mockprep.models.feedback import InterviewFeedback
from mockprep.models.interview import Interview

__all__ = [
    "Base",
    "Interview",
    "InterviewFeedback",
]
