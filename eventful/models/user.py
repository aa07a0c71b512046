"""
User and sign-in session models for Eventful.
"""

import re
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from .base import Base
from .like import Like
from .validation import ValidatedModel, ValidationErrors, is_blank

EMAIL_PATTERN = re.compile(r"\S+@\S+")
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9]+")


class UserRole(str, Enum):
    """User roles carried in access tokens."""
    USER = "user"
    ADMIN = "admin"


class User(ValidatedModel, Base):
    """
    User model representing a person who registers for and likes events.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    admin = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    registrations = relationship("Registration", back_populates="user", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
    liked_events = association_proxy("likes", "event", creator=lambda event: Like(event=event))
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', email='{self.email}')>"

    @property
    def role(self) -> UserRole:
        return UserRole.ADMIN if self.admin else UserRole.USER

    def validate(self) -> ValidationErrors:
        errors = ValidationErrors()

        if is_blank(self.name):
            errors.add("name", "can't be blank")

        if is_blank(self.email):
            errors.add("email", "can't be blank")
        elif not EMAIL_PATTERN.fullmatch(self.email):
            errors.add("email", "is invalid")

        if is_blank(self.username):
            errors.add("username", "can't be blank")
        elif not USERNAME_PATTERN.fullmatch(self.username):
            errors.add("username", "is invalid")

        if is_blank(self.password_hash):
            errors.add("password", "can't be blank")

        return errors


class UserSession(Base):
    """
    Sign-in session. One row per successful sign-in; the token is handed to
    the client and looked up on every authenticated request.
    """
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_token = Column(Text, unique=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    last_accessed = Column(DateTime, default=datetime.now, nullable=False)

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<UserSession(id={self.id}, user_id={self.user_id}, active={self.is_active})>"

    @property
    def is_expired(self) -> bool:
        return self.expires_at < datetime.now()
