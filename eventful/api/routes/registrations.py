"""
Registration endpoints, nested under an event.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from ...db.database import EventRepository, RegistrationRepository
from ...db.redis_client import CacheManager
from ...models.user import User
from ...schemas.user import RegistrationCreate, RegistrationResponse
from ..dependencies import (
    get_event_repository, get_registration_repository, get_cache_manager, require_signin
)
from .events import get_event_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{event_id}/registrations", tags=["Registrations"])


@router.get("", response_model=List[RegistrationResponse])
async def list_registrations(
    event_id: int,
    event_repo: EventRepository = Depends(get_event_repository),
    registration_repo: RegistrationRepository = Depends(get_registration_repository)
):
    """
    List an event's registrations, newest first.
    """
    event = get_event_or_404(event_id, event_repo)
    return registration_repo.for_event(event.id)


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def create_registration(
    event_id: int,
    registration_data: RegistrationCreate,
    current_user: User = Depends(require_signin),
    event_repo: EventRepository = Depends(get_event_repository),
    registration_repo: RegistrationRepository = Depends(get_registration_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    Register the signed-in user for an event.

    Raises:
        HTTPException: If the event does not exist or is sold out
        RecordInvalid: If the registration fails validation
    """
    event = get_event_or_404(event_id, event_repo)
    if event.is_sold_out:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Event is sold out"
        )

    registration = registration_repo.register(event, current_user, registration_data.how_heard)
    # Listings show the sold-out flag
    await cache_manager.invalidate_events()

    logger.info(f"User {current_user.id} registered for event {event.id}")
    return registration
