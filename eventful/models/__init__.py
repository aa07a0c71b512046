"""
ORM models for Eventful.
"""

from .base import Base
from .event import Event
from .registration import Registration, HOW_HEARD_OPTIONS
from .like import Like
from .user import User, UserSession
from .validation import ValidationErrors, RecordInvalid

__all__ = [
    "Base",
    "Event",
    "Registration",
    "HOW_HEARD_OPTIONS",
    "Like",
    "User",
    "UserSession",
    "ValidationErrors",
    "RecordInvalid",
]
