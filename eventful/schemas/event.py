"""
Pydantic schemas for Event-related operations.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class EventFilter(str, Enum):
    """Named event listings."""
    UPCOMING = "upcoming"
    PAST = "past"
    FREE = "free"
    RECENT = "recent"


class EventBase(BaseModel):
    """Base event schema."""
    name: str = Field(..., min_length=1, max_length=255, description="Event name")
    description: str = Field(..., min_length=1, description="Event description")
    location: str = Field(..., min_length=1, max_length=255, description="Event location")
    price: Decimal = Field(Decimal("0.00"), ge=0, description="Event price per ticket")
    capacity: int = Field(..., gt=0, description="Event capacity")
    starts_at: Optional[datetime] = Field(None, description="Event start date and time")
    image_file_name: Optional[str] = Field(None, max_length=255, description="Event image file name")


class EventCreate(EventBase):
    """Schema for creating a new event."""
    pass


class EventUpdate(BaseModel):
    """Schema for updating an event."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, gt=0)
    starts_at: Optional[datetime] = None
    image_file_name: Optional[str] = Field(None, max_length=255)


class EventSummary(BaseModel):
    """Event as shown in listings."""
    id: int
    name: str
    location: str
    price: Decimal
    starts_at: Optional[datetime] = None
    image_file_name: Optional[str] = None
    is_free: bool
    is_sold_out: bool

    class Config:
        from_attributes = True


class EventResponse(EventBase):
    """Schema for event response."""
    id: int
    is_free: bool
    is_sold_out: bool
    spots_left: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventDetailResponse(EventResponse):
    """Event with like information for the requesting user."""
    likes_count: int
    current_user_like_id: Optional[int] = None


class EventListResponse(BaseModel):
    """Schema for event list response."""
    filter: EventFilter
    events: List[EventSummary]
    total: int


class MessageResponse(BaseModel):
    """Generic message response schema."""
    message: str
    success: bool = True
