from fastapi import APIRouter

from mockprep.api.routes import feedback
from mockprep.api.routes import interviews
from mockprep.api.routes import slots

api_router = APIRouter()
api_router.include_router(slots.router)
api_router.include_router(interviews.router)
api_router.include_router(interviews.internal_router)
api_router.include_router(feedback.router)
api_router.include_router(feedback.internal_router)
