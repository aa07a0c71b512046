"""
Like endpoints, nested under an event. Both require a signed-in user.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from ...db.database import EventRepository, LikeRepository
from ...models.user import User
from ...schemas.event import MessageResponse
from ...schemas.user import LikeResponse
from ..dependencies import get_event_repository, get_like_repository, require_signin
from .events import get_event_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{event_id}/likes", tags=["Likes"])


@router.post("", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def create_like(
    event_id: int,
    current_user: User = Depends(require_signin),
    event_repo: EventRepository = Depends(get_event_repository),
    like_repo: LikeRepository = Depends(get_like_repository)
):
    """
    Like an event as the signed-in user. Liking twice returns the same like.
    """
    event = get_event_or_404(event_id, event_repo)
    like = like_repo.like(event, current_user)

    logger.info(f"User {current_user.id} liked event {event.id}")
    return like


@router.delete("/{like_id}", response_model=MessageResponse)
async def delete_like(
    event_id: int,
    like_id: int,
    current_user: User = Depends(require_signin),
    event_repo: EventRepository = Depends(get_event_repository),
    like_repo: LikeRepository = Depends(get_like_repository)
):
    """
    Remove one of the signed-in user's likes.
    """
    event = get_event_or_404(event_id, event_repo)
    like = like_repo.get_owned(like_id, event.id, current_user.id)
    if not like:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Like not found"
        )

    like_repo.unlike(like)

    logger.info(f"User {current_user.id} unliked event {event.id}")
    return MessageResponse(message="Unliked!")
