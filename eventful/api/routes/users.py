"""
User account endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ...db.database import UserRepository, UserSessionRepository
from ...db.redis_client import CacheManager
from ...models.user import User
from ...schemas.event import EventSummary, MessageResponse
from ...schemas.user import (
    UserCreate, UserUpdate, UserResponse, UserProfileResponse,
    UserRegistration, TokenResponse
)
from ...services.session_manager import SessionManager
from ..dependencies import (
    SESSION_COOKIE, get_user_repository, get_session_repository,
    get_session_manager, get_cache_manager, require_signin
)
from .sessions import start_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_or_404(user_id: int, user_repo: UserRepository) -> User:
    user = user_repo.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.get("", response_model=List[UserResponse])
async def list_users(
    current_user: User = Depends(require_signin),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """
    List users by name. Requires a signed-in user.
    """
    return user_repo.get_all()


@router.post("", name="create_user", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    request: Request,
    response: Response,
    user_repo: UserRepository = Depends(get_user_repository),
    session_repo: UserSessionRepository = Depends(get_session_repository),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Sign up and sign in.

    Raises:
        RecordInvalid: If the email or username is taken or invalid
    """
    user = User(
        name=user_data.name,
        username=user_data.username,
        email=user_data.email,
        password_hash=manager.password_manager.hash_password(user_data.password)
    )
    user_repo.save_or_raise(user)

    logger.info(f"User {user.id} signed up")
    return await start_session(user, request, response, session_repo, manager)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: int,
    user_repo: UserRepository = Depends(get_user_repository)
):
    """
    Get a user's profile with their registrations and liked events.
    """
    user = get_user_or_404(user_id, user_repo)

    return UserProfileResponse(
        **UserResponse.model_validate(user).model_dump(),
        registrations=[UserRegistration.model_validate(r) for r in user.registrations],
        liked_events=[EventSummary.model_validate(event) for event in user.liked_events]
    )


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(require_signin),
    user_repo: UserRepository = Depends(get_user_repository),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Update the signed-in user's own account.
    """
    user = get_user_or_404(user_id, user_repo)
    if user.id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only change your own account"
        )

    update_data = user_data.model_dump(exclude_unset=True)
    password = update_data.pop("password", None)
    if password:
        update_data["password_hash"] = manager.password_manager.hash_password(password)

    return user_repo.update(user, update_data)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    response: Response,
    current_user: User = Depends(require_signin),
    user_repo: UserRepository = Depends(get_user_repository),
    cache_manager: CacheManager = Depends(get_cache_manager)
):
    """
    Delete an account with its registrations, likes and sessions. Users can
    delete themselves; admins can delete anyone.
    """
    user = get_user_or_404(user_id, user_repo)
    actor_id = current_user.id
    deleting_self = user.id == actor_id
    if not (deleting_self or current_user.admin):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    user_repo.delete(user)
    await cache_manager.invalidate_events()

    if deleting_self:
        response.delete_cookie(SESSION_COOKIE)

    logger.info(f"User {user_id} deleted by user {actor_id}")
    return MessageResponse(message="Account successfully deleted!")
