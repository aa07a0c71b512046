"""
Event endpoints.
Listings and details are public; managing events requires an admin.
"""

import logging
import math
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from ...db.database import EventRepository, LikeRepository
from ...db.redis_client import CacheManager
from ...models.user import User
from ...schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventDetailResponse,
    EventListResponse, EventFilter, EventSummary, MessageResponse
)
from ..dependencies import (
    get_event_repository, get_like_repository, get_cache_manager,
    get_current_user, require_admin
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])


def get_event_or_404(event_id: int, event_repo: EventRepository):
    event = event_repo.get_by_id(event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    return event


async def _list_events(
    listing: EventFilter,
    event_repo: EventRepository,
    cache_manager: CacheManager,
    limit: Optional[int] = None
) -> dict:
    cached = await cache_manager.get_cached_events_list(listing.value, limit)
    if cached:
        return cached

    if listing == EventFilter.PAST:
        events = event_repo.past()
    elif listing == EventFilter.FREE:
        events = event_repo.free()
    elif listing == EventFilter.RECENT:
        events = event_repo.recent(limit)
    else:
        events = event_repo.upcoming()

    response = EventListResponse(
        filter=listing,
        events=[EventSummary.model_validate(event) for event in events],
        total=len(events)
    ).model_dump(mode="json")

    # Every listing is partitioned by start time, so it goes stale when the next event starts
    next_start = event_repo.next_start()
    expires_by = None
    if next_start is not None:
        expires_by = math.ceil((next_start - datetime.now()).total_seconds())

    await cache_manager.cache_events_list(response, listing.value, limit, expires_by)
    return response


@router.get("", response_model=EventListResponse)
async def list_events(
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    List upcoming events, soonest first.
    """
    return await _list_events(EventFilter.UPCOMING, event_repo, cache_manager)


@router.get("/filter/{listing}", response_model=EventListResponse)
async def list_filtered_events(
    listing: EventFilter,
    limit: int = Query(3, ge=1, le=100, description="Number of recent events"),
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    List events by filter.

    ``past`` and ``free`` are ordered earliest first; ``recent`` returns the
    ``limit`` most recent past events, most recent first.
    """
    return await _list_events(
        listing, event_repo, cache_manager,
        limit if listing == EventFilter.RECENT else None
    )


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    event_repo: EventRepository = Depends(get_event_repository),
    like_repo: LikeRepository = Depends(get_like_repository)
):
    """
    Get event details, including whether the current user likes it.
    """
    event = get_event_or_404(event_id, event_repo)

    current_like = None
    if current_user is not None:
        current_like = like_repo.get_for_user(event.id, current_user.id)

    return EventDetailResponse(
        **EventResponse.model_validate(event).model_dump(),
        likes_count=like_repo.count_for_event(event.id),
        current_user_like_id=current_like.id if current_like else None
    )


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    current_user: User = Depends(require_admin),
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    Create a new event (admin only).

    Raises:
        RecordInvalid: If the event fails validation
    """
    event = event_repo.create(event_data.model_dump())
    await cache_manager.invalidate_events()

    logger.info(f"Event {event.id} created by user {current_user.id}")
    return event


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    event_data: EventUpdate,
    current_user: User = Depends(require_admin),
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    Update an event (admin only).
    """
    event = get_event_or_404(event_id, event_repo)
    event = event_repo.update(event, event_data.model_dump(exclude_unset=True))
    await cache_manager.invalidate_events()

    logger.info(f"Event {event.id} updated by user {current_user.id}")
    return event


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: int,
    current_user: User = Depends(require_admin),
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    Delete an event with its registrations and likes (admin only).
    """
    event = get_event_or_404(event_id, event_repo)
    event_repo.delete(event)
    await cache_manager.invalidate_events()

    logger.info(f"Event {event_id} deleted by user {current_user.id}")
    return MessageResponse(message="Event successfully deleted!")
