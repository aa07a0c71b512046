"""
Registration model: a user's reserved spot at an event.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base
from .validation import ValidatedModel, ValidationErrors

HOW_HEARD_OPTIONS = [
    "Newsletter",
    "Blog Post",
    "Twitter",
    "Web Search",
    "Friend/Coworker",
    "Other",
]


class Registration(ValidatedModel, Base):
    """Registration of a user for an event."""
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    how_heard = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    event = relationship("Event", back_populates="registrations")
    user = relationship("User", back_populates="registrations")

    __table_args__ = (
        Index("idx_registration_user_event", "user_id", "event_id"),
    )

    def __repr__(self):
        return f"<Registration(id={self.id}, event_id={self.event_id}, user_id={self.user_id})>"

    def validate(self) -> ValidationErrors:
        errors = ValidationErrors()

        if self.how_heard not in HOW_HEARD_OPTIONS:
            errors.add("how_heard", "is not included in the list")
        if self.event is None and self.event_id is None:
            errors.add("event", "must exist")
        if self.user is None and self.user_id is None:
            errors.add("user", "must exist")

        return errors
