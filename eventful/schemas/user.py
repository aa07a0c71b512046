"""
Pydantic schemas for users, registrations, likes and sign-in.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, validator

from ..models.registration import HOW_HEARD_OPTIONS
from .event import EventSummary


class UserBase(BaseModel):
    """Base user schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

    @validator("username")
    def validate_username(cls, v):
        """Usernames are letters and digits only."""
        if not v.isalnum():
            raise ValueError("Username must contain only letters and numbers")
        return v


class UserCreate(UserBase):
    """Schema for signing up."""
    password: str = Field(..., min_length=8, max_length=72)


class UserUpdate(BaseModel):
    """Schema for profile updates."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=72)


class UserSummary(BaseModel):
    id: int
    name: str
    username: str

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """Schema for user response."""
    email: str
    admin: bool
    created_at: datetime


class RegistrationCreate(BaseModel):
    """Schema for registering for an event."""
    how_heard: str = Field(..., description=f"One of: {', '.join(HOW_HEARD_OPTIONS)}")


class RegistrationResponse(BaseModel):
    id: int
    event_id: int
    user: UserSummary
    how_heard: str
    created_at: datetime

    class Config:
        from_attributes = True


class UserRegistration(BaseModel):
    """A registration as listed on a user's profile."""
    id: int
    how_heard: str
    created_at: datetime
    event: EventSummary

    class Config:
        from_attributes = True


class UserProfileResponse(UserResponse):
    """User with their registrations and liked events."""
    registrations: List[UserRegistration]
    liked_events: List[EventSummary]


class LikeResponse(BaseModel):
    id: int
    event_id: int
    user_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class SignInRequest(BaseModel):
    """Schema for signing in with an email address or username."""
    email_or_username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for a successful sign-in."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class SignInInfo(BaseModel):
    """Describes how to sign in."""
    message: str
    sign_in_url: str
    sign_up_url: str
    fields: List[str]
