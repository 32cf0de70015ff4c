"""
Base CRUD operations.

This module contains base CRUD (Create, Read, Update) operations
that can be inherited by specific model CRUD classes.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Base CRUD operations class.

    Bound to one database session; every write is committed immediately.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize CRUD operations for a specific model.

        Args:
            model: The SQLAlchemy model class
            db: Database session used for all operations
        """
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalars().first()

    async def add(self, db_obj: ModelType) -> ModelType:
        """
        Insert a new record.

        Args:
            db_obj: Model instance to insert

        Returns:
            The inserted instance, refreshed with database defaults
        """
        self.db.add(db_obj)
        await self.db.commit()
        await self.db.refresh(db_obj)
        return db_obj

    async def update(self, db_obj: ModelType) -> ModelType:
        """
        Persist changes made to an existing record.

        Args:
            db_obj: Modified model instance

        Returns:
            The updated instance
        """
        self.db.add(db_obj)
        await self.db.commit()
        await self.db.refresh(db_obj)
        return db_obj

    async def exists(self, id: Any) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Record ID to check

        Returns:
            True if record exists, False otherwise
        """
        result = await self.db.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalars().first() is not None
