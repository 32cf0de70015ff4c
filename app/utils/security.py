"""
Security utilities.

This module contains the password hasher and the JWT token issuer used
by the authentication service and the bearer dependency.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.models.user import User


class PasswordHasher:
    """
    bcrypt password hashing.

    Each hash carries its own random salt, so hashing the same password
    twice gives different strings.
    """

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash_password(self, password: str) -> str:
        """
        Hash a password.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        return self.pwd_context.hash(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            password: Plain text password
            hashed_password: Hashed password

        Returns:
            True if password matches, False otherwise
        """
        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            # Malformed or unknown hash format
            return False


class TokenIssuer:
    """Signs and validates JWT access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        if not secret_key or not secret_key.strip():
            raise ValueError("JWT secret key is not configured.")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token for a user.

        Args:
            user: Authenticated user
            expires_delta: Token lifetime, defaults to ``expire_minutes``

        Returns:
            Encoded JWT token
        """
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {
            "sub": str(user.id),
            "name": user.username,
            "jti": str(uuid.uuid4()),
            "exp": expire,
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[dict]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Decoded token data or None if invalid or expired
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError:
            return None
