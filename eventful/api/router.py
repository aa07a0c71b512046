"""
API router for Eventful.
"""

from fastapi import APIRouter

from .routes.events import router as events_router
from .routes.registrations import router as registrations_router
from .routes.likes import router as likes_router
from .routes.users import router as users_router
from .routes.sessions import router as sessions_router

router = APIRouter()

# Include sub-routers
router.include_router(events_router)
router.include_router(registrations_router)
router.include_router(likes_router)
router.include_router(users_router)
router.include_router(sessions_router)
