"""
Database connection, session management and repositories for Eventful.
"""

import logging
from datetime import datetime
from typing import Generator, List, Optional

from sqlalchemy import create_engine, func, or_, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from ..models.base import Base
from ..models.event import Event
from ..models.like import Like
from ..models.registration import Registration
from ..models.user import User, UserSession
from ..models.validation import RecordInvalid

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Database connection manager.
    Handles connection pooling and session management.
    """

    def __init__(self):
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

    def initialize(self, database_url: str):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL
        """
        try:
            connect_args = {}
            if database_url.startswith("sqlite"):
                connect_args["check_same_thread"] = False

            self.engine = create_engine(
                database_url,
                connect_args=connect_args,
                pool_pre_ping=True,
                pool_recycle=300,
                echo=False
            )

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine
            )

            self._initialized = True
            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session.

        Yields:
            SQLAlchemy database session
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_manager(self):
        """Get database manager instance."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")
        return self

    def create_tables(self):
        """Create all database tables."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {e}")
            raise

    def health_check(self) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        if not self._initialized:
            return False

        try:
            session = self.SessionLocal()
            try:
                session.execute(text("SELECT 1"))
                return True
            finally:
                session.close()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


class BaseRepository:
    """
    Base repository with validated persistence.

    ``save`` never raises on invalid records: it leaves the messages on
    ``entity.errors`` and returns False. ``save_or_raise`` and ``create``
    raise ``RecordInvalid`` instead.
    """

    model_class = None

    def __init__(self, session: Session):
        self.session = session

    def check(self, entity) -> None:
        """Hook for validations that need the database. Adds to ``entity.errors``."""

    def save(self, entity) -> bool:
        """Validate and persist an entity."""
        if not entity.is_valid():
            return False

        self.check(entity)
        if entity.errors:
            return False

        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return True

    def save_or_raise(self, entity):
        """Validate and persist an entity, raising ``RecordInvalid`` on failure."""
        if not self.save(entity):
            raise RecordInvalid(entity, entity.errors)
        return entity

    def create(self, data: dict):
        """Create a new entity from attribute data."""
        return self.save_or_raise(self.model_class(**data))

    def update(self, entity, data: dict):
        """Assign attributes and persist; discards the changes when invalid."""
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            return self.save_or_raise(entity)
        except RecordInvalid:
            self.session.rollback()
            raise

    def get_by_id(self, entity_id: int):
        """Get entity by ID."""
        return self.session.query(self.model_class).filter(
            self.model_class.id == entity_id
        ).first()

    def get_all(self, skip: int = 0, limit: int = 100) -> list:
        """Get all entities with pagination."""
        return self.session.query(self.model_class).order_by(
            self.model_class.id
        ).offset(skip).limit(limit).all()

    def count(self) -> int:
        """Count total entities."""
        return self.session.query(self.model_class).count()

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to commit {self.model_class.__name__}: {e}")
            self.session.rollback()
            raise


class EventRepository(BaseRepository):
    """
    Repository for Event model operations.
    """

    model_class = Event

    def upcoming(self) -> List[Event]:
        """Events starting in the future, soonest first."""
        return self.session.query(Event).filter(
            Event.starts_at > datetime.now()
        ).order_by(Event.starts_at.asc()).all()

    def past(self) -> List[Event]:
        """Events that already started, earliest first."""
        return self.session.query(Event).filter(
            Event.starts_at < datetime.now()
        ).order_by(Event.starts_at.asc()).all()

    def free(self) -> List[Event]:
        """Upcoming events with a zero price, soonest first."""
        return self.session.query(Event).filter(
            Event.starts_at > datetime.now(),
            Event.price == 0
        ).order_by(Event.starts_at.asc()).all()

    def recent(self, limit: int = 3) -> List[Event]:
        """The ``limit`` most recently started events, most recent first."""
        if limit <= 0:
            return []
        return self.session.query(Event).filter(
            Event.starts_at < datetime.now()
        ).order_by(Event.starts_at.desc()).limit(limit).all()

    def next_start(self) -> Optional[datetime]:
        """Start time of the soonest upcoming event; listings change then."""
        return self.session.query(func.min(Event.starts_at)).filter(
            Event.starts_at > datetime.now()
        ).scalar()

    def delete(self, event: Event) -> None:
        """
        Delete an event together with its registrations and likes in a
        single transaction.
        """
        try:
            for registration in list(event.registrations):
                self.session.delete(registration)
            for like in list(event.likes):
                self.session.delete(like)
            self.session.delete(event)
            self.session.commit()
            logger.info(f"Deleted event {event.id}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete event {event.id}: {e}")
            self.session.rollback()
            raise


class RegistrationRepository(BaseRepository):
    """
    Repository for Registration model operations.
    """

    model_class = Registration

    def for_event(self, event_id: int) -> List[Registration]:
        """Registrations for an event, newest first."""
        return self.session.query(Registration).filter(
            Registration.event_id == event_id
        ).order_by(Registration.created_at.desc(), Registration.id.desc()).all()

    def register(self, event: Event, user: User, how_heard: Optional[str]) -> Registration:
        """Register a user for an event. Raises ``RecordInvalid`` when invalid."""
        registration = Registration(event_id=event.id, user_id=user.id, how_heard=how_heard)
        return self.save_or_raise(registration)


class LikeRepository(BaseRepository):
    """
    Repository for Like model operations.
    """

    model_class = Like

    def get_for_user(self, event_id: int, user_id: int) -> Optional[Like]:
        """Get a user's like of an event."""
        return self.session.query(Like).filter(
            Like.event_id == event_id,
            Like.user_id == user_id
        ).first()

    def get_owned(self, like_id: int, event_id: int, user_id: int) -> Optional[Like]:
        """Get a like by ID, only if it belongs to the user and the event."""
        return self.session.query(Like).filter(
            Like.id == like_id,
            Like.event_id == event_id,
            Like.user_id == user_id
        ).first()

    def like(self, event: Event, user: User) -> Like:
        """Like an event; returns the existing like if there is one."""
        existing = self.get_for_user(event.id, user.id)
        if existing:
            return existing
        return self.save_or_raise(Like(event_id=event.id, user_id=user.id))

    def unlike(self, like: Like) -> None:
        """Remove a like."""
        self.session.delete(like)
        self._commit()

    def count_for_event(self, event_id: int) -> int:
        return self.session.query(Like).filter(Like.event_id == event_id).count()


class UserRepository(BaseRepository):
    """
    User repository for user-related database operations.
    """

    model_class = User

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address, ignoring case."""
        return self.session.query(User).filter(
            func.lower(User.email) == email.lower()
        ).first()

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username, ignoring case."""
        return self.session.query(User).filter(
            func.lower(User.username) == username.lower()
        ).first()

    def get_by_email_or_username(self, identifier: str) -> Optional[User]:
        """Get user whose email or username matches the identifier."""
        identifier = identifier.lower()
        return self.session.query(User).filter(
            or_(
                func.lower(User.email) == identifier,
                func.lower(User.username) == identifier
            )
        ).first()

    def get_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        """Get users ordered by name."""
        return self.session.query(User).order_by(User.name).offset(skip).limit(limit).all()

    def check(self, user: User) -> None:
        """Email and username must be unique, ignoring case."""
        existing = self.get_by_email(user.email)
        if existing is not None and existing.id != user.id:
            user.errors.add("email", "has already been taken")

        existing = self.get_by_username(user.username)
        if existing is not None and existing.id != user.id:
            user.errors.add("username", "has already been taken")

    def delete(self, user: User) -> None:
        """Delete a user and everything that belongs to them in one transaction."""
        try:
            for registration in list(user.registrations):
                self.session.delete(registration)
            for like in list(user.likes):
                self.session.delete(like)
            for user_session in list(user.sessions):
                self.session.delete(user_session)
            self.session.delete(user)
            self.session.commit()
            logger.info(f"Deleted user {user.id}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete user {user.id}: {e}")
            self.session.rollback()
            raise


class UserSessionRepository:
    """
    Sign-in session repository.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, **kwargs) -> UserSession:
        user_session = UserSession(**kwargs)
        self.session.add(user_session)
        self.session.commit()
        self.session.refresh(user_session)
        return user_session

    def get_by_token(self, token: str) -> Optional[UserSession]:
        """Get session by token."""
        return self.session.query(UserSession).filter(
            UserSession.session_token == token
        ).first()

    def get_user_sessions(self, user_id: int) -> List[UserSession]:
        """Get all active sessions for a user."""
        return self.session.query(UserSession).filter(
            UserSession.user_id == user_id,
            UserSession.is_active.is_(True)
        ).all()

    def deactivate_user_sessions(self, user_id: int) -> int:
        """Deactivate all sessions for a user."""
        sessions = self.get_user_sessions(user_id)
        for user_session in sessions:
            user_session.is_active = False
        self.session.commit()
        return len(sessions)

    def cleanup_expired_sessions(self) -> int:
        """Remove expired sessions."""
        expired_sessions = self.session.query(UserSession).filter(
            UserSession.expires_at < datetime.now()
        ).all()

        for user_session in expired_sessions:
            self.session.delete(user_session)

        self.session.commit()
        return len(expired_sessions)
