"""
Event model for Eventful.
"""

import re
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, CheckConstraint
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship, validates

from .base import Base
from .like import Like
from .validation import ValidatedModel, ValidationErrors, is_blank, is_integer, is_number

IMAGE_FILE_NAME_PATTERN = re.compile(r".+\.(png|jpg|gif)", re.IGNORECASE)
DESCRIPTION_MIN_LENGTH = 25


class Event(ValidatedModel, Base):
    """
    Event model representing a scheduled occurrence users can register for
    and like.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    capacity = Column(Integer, nullable=False, default=1)
    starts_at = Column(DateTime, nullable=True, index=True)
    image_file_name = Column(String(255), nullable=True)

    # Metadata
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    registrations = relationship(
        "Registration", back_populates="event", cascade="all, delete-orphan",
        order_by="Registration.created_at",
    )
    likes = relationship("Like", back_populates="event", cascade="all, delete-orphan")
    likers = association_proxy("likes", "user", creator=lambda user: Like(user=user))

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        CheckConstraint("capacity > 0", name="check_event_capacity_positive"),
    )

    def __repr__(self):
        return f"<Event(id={self.id}, name='{self.name}', location='{self.location}')>"

    @validates("capacity")
    def normalize_capacity(self, key, value):
        if isinstance(value, Decimal) and is_integer(value):
            return int(value)
        return value

    @validates("starts_at")
    def normalize_starts_at(self, key, value):
        """Start times are stored as naive local time; aware values are converted."""
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    def validate(self) -> ValidationErrors:
        errors = ValidationErrors()

        for field in ("name", "description", "location"):
            if is_blank(getattr(self, field)):
                errors.add(field, "can't be blank")

        if not is_blank(self.description) and len(self.description) < DESCRIPTION_MIN_LENGTH:
            errors.add("description", f"is too short (minimum is {DESCRIPTION_MIN_LENGTH} characters)")

        if not is_number(self.price):
            errors.add("price", "is not a number")
        elif self.price < 0:
            errors.add("price", "must be greater than or equal to 0")

        if not is_number(self.capacity):
            errors.add("capacity", "is not a number")
        elif not is_integer(self.capacity):
            errors.add("capacity", "must be an integer")
        elif self.capacity <= 0:
            errors.add("capacity", "must be greater than 0")

        if self.image_file_name and not IMAGE_FILE_NAME_PATTERN.fullmatch(self.image_file_name):
            errors.add("image_file_name", "must reference a GIF, JPG, or PNG image")

        return errors

    @property
    def is_free(self) -> bool:
        """Check if the event costs nothing to attend."""
        return self.price is not None and self.price == 0

    @property
    def spots_left(self) -> int:
        """Capacity minus the number of registrations."""
        return (self.capacity or 0) - len(self.registrations)

    @property
    def is_sold_out(self) -> bool:
        """Check if no spots are left."""
        return self.spots_left <= 0

    @property
    def is_upcoming(self) -> bool:
        return self.starts_at is not None and self.starts_at > datetime.now()
