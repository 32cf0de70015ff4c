"""
User database model.

This module contains the User model together with the account lockout
rules applied on every login attempt.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String

from app.models.base import BaseModel, generate_id


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class User(BaseModel):
    """
    User account with credentials and lockout state.

    The account is locked while ``lockout_end`` lies in the future. The
    counter of failed attempts is only cleared by a successful login.
    """

    __tablename__ = "users"

    username = Column(String(256), nullable=False)
    normalized_username = Column(String(256), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    failed_login_attempts = Column(Integer, nullable=False, default=0, server_default="0")
    lockout_end = Column(DateTime(timezone=True), nullable=True)

    def __init__(self, username: str, password_hash: str, **kwargs):
        """
        Create a new user.

        Args:
            username: Login name, must not be empty or whitespace
            password_hash: Hash produced by the password hasher, must not be empty

        Raises:
            ValueError: If username or password_hash is empty
        """
        if not username or not username.strip():
            raise ValueError("Username cannot be empty.")
        if not password_hash or not password_hash.strip():
            raise ValueError("Password hash cannot be empty.")

        super().__init__(**kwargs)
        self.id = kwargs.get("id") or generate_id()
        self.username = username
        self.normalized_username = normalize_username(username)
        self.password_hash = password_hash
        self.failed_login_attempts = 0
        self.lockout_end = None

    def is_locked_out(self, now: Optional[datetime] = None) -> bool:
        """Return True if the lockout window is still open."""
        if self.lockout_end is None:
            return False
        now = now or utcnow()
        return as_utc(self.lockout_end) > now

    def lockout_remaining(self, now: Optional[datetime] = None) -> timedelta:
        """Time left until the lockout ends (zero when not locked)."""
        if not self.is_locked_out(now):
            return timedelta(0)
        now = now or utcnow()
        return as_utc(self.lockout_end) - now

    def increment_failed_attempts(
        self,
        max_attempts: int,
        lockout_duration: timedelta,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Record a failed login and lock the account once the limit is reached.

        The counter keeps growing past ``max_attempts``; every further call
        moves ``lockout_end`` to ``now + lockout_duration``.
        """
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts >= max_attempts:
            self.lockout_end = (now or utcnow()) + lockout_duration

    def reset_failed_attempts(self) -> None:
        """Clear the failed attempts counter and any lockout."""
        self.failed_login_attempts = 0
        self.lockout_end = None


def normalize_username(username: str) -> str:
    """Key used for case-insensitive username lookups."""
    return username.lower()
