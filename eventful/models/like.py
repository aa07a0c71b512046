"""
Like model: a user's expressed interest in an event.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base
from .validation import ValidatedModel, ValidationErrors


class Like(ValidatedModel, Base):
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    event = relationship("Event", back_populates="likes")
    user = relationship("User", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_like_user_event"),
    )

    def __repr__(self):
        return f"<Like(id={self.id}, event_id={self.event_id}, user_id={self.user_id})>"

    def validate(self) -> ValidationErrors:
        errors = ValidationErrors()
        if self.event is None and self.event_id is None:
            errors.add("event", "must exist")
        if self.user is None and self.user_id is None:
            errors.add("user", "must exist")
        return errors
