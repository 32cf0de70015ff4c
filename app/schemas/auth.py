"""
Authentication schemas.

This module contains Pydantic schemas for authentication requests and responses.
"""

from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema


class RegisterRequest(BaseSchema):
    """Schema for registering a new user."""
    # Optional so that missing fields reach the request validators and
    # come back as a "Validation failed" envelope rather than a 422.
    username: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseSchema):
    """Schema for logging in."""
    username: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseSchema):
    """Token issued after a successful registration or login."""
    token: str
    user_id: str = Field(alias="userId")
    username: str
