"""
Sign-in endpoints.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ...db.database import UserRepository, UserSessionRepository
from ...models.user import User
from ...schemas.event import MessageResponse
from ...schemas.user import SignInRequest, SignInInfo, TokenResponse, UserResponse
from ...services.session_manager import SessionManager
from ..dependencies import (
    SESSION_COOKIE, get_user_repository, get_session_repository,
    get_session_manager, get_session_token, get_client_ip
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Session"])


def set_session_cookie(response: Response, token: str, max_age: int):
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=max_age,
        httponly=True,
        samesite="lax"
    )


async def start_session(
    user: User,
    request: Request,
    response: Response,
    session_repo: UserSessionRepository,
    manager: SessionManager
) -> TokenResponse:
    """Sign a user in and attach the session cookie to the response."""
    user_session = await manager.sign_in(
        user,
        session_repo,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent")
    )
    expires_in = manager.jwt_manager.get_token_expiry()
    set_session_cookie(response, user_session.session_token, expires_in)

    return TokenResponse(
        access_token=user_session.session_token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user)
    )


@router.get("/new", name="new_session", response_model=SignInInfo)
async def new_session(request: Request):
    """
    Sign-in entry point. Requests that need a signed-in user are redirected
    here.
    """
    return SignInInfo(
        message="Sign in with your email address or username and password",
        sign_in_url=str(request.url_for("create_session")),
        sign_up_url=str(request.url_for("create_user")),
        fields=["email_or_username", "password"]
    )


@router.post("", name="create_session", response_model=TokenResponse)
async def create_session(
    credentials: SignInRequest,
    request: Request,
    response: Response,
    user_repo: UserRepository = Depends(get_user_repository),
    session_repo: UserSessionRepository = Depends(get_session_repository),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Sign in.

    Raises:
        HTTPException: If the credentials are invalid
    """
    user = await manager.authenticate(credentials.email_or_username, credentials.password, user_repo)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email/username and password combination!"
        )

    logger.info(f"User {user.id} signed in")
    return await start_session(user, request, response, session_repo, manager)


@router.delete("", response_model=MessageResponse)
async def destroy_session(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    session_repo: UserSessionRepository = Depends(get_session_repository),
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Sign out. Always clears the session cookie.
    """
    if token:
        await manager.sign_out(token, session_repo)
    response.delete_cookie(SESSION_COOKIE)
    return MessageResponse(message="You're now signed out!")
