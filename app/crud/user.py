"""
User CRUD operations.

This module contains the user store used by the authentication service.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.crud.base import CRUDBase
from app.exceptions import UsernameAlreadyExistsError
from app.models.user import User, normalize_username


class CRUDUser(CRUDBase[User]):
    """
    CRUD operations for User model.

    Usernames are matched case-insensitively through the
    ``normalized_username`` column, which carries a unique index.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username, ignoring case.

        Args:
            username: Username to look up

        Returns:
            User instance or None if not found
        """
        result = await self.db.execute(
            select(User).where(User.normalized_username == normalize_username(username))
        )
        return result.scalars().first()

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken, ignoring case."""
        result = await self.db.execute(
            select(User.id).where(User.normalized_username == normalize_username(username))
        )
        return result.scalars().first() is not None

    async def add(self, db_obj: User) -> User:
        """
        Insert a new user.

        Raises:
            UsernameAlreadyExistsError: If the unique username index rejects the row
        """
        try:
            return await super().add(db_obj)
        except IntegrityError as exc:
            await self.db.rollback()
            raise UsernameAlreadyExistsError(db_obj.username) from exc
