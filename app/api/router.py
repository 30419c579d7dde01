"""
API router for the Event Manager Service.
"""

from fastapi import APIRouter

from ..schemas.common import ErrorResponse
from .routes.events import router as events_router
from .routes.users import router as users_router

# Error bodies every /api operation may return
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request or query parameters"},
    403: {"model": ErrorResponse, "description": "Acting user does not own the event"},
    404: {"model": ErrorResponse, "description": "User or event not found"},
    409: {"model": ErrorResponse, "description": "Duplicate user or user still owns events"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}

router = APIRouter(prefix="/api", responses=ERROR_RESPONSES)

# Include sub-routers
router.include_router(events_router)
router.include_router(users_router)
