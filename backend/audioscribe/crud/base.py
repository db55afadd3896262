from typing import Any, Generic, List, Optional, Type, TypeVar
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from audioscribe.db.base_class import Base
from audioscribe.core.exceptions import StoreError

ModelType = TypeVar("ModelType", bound=Base)


def parse_uuid(value: Any) -> uuid.UUID:
    """
    Coerce a store identifier to UUID

    Raises:
        StoreError: If the value is not a valid UUID, the way the database
            would reject it
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise StoreError(f'invalid input syntax for type uuid: "{value}"')


class CRUDBase(Generic[ModelType]):
    """
    Base class for store operations

    Every database failure is logged and re-raised as ``StoreError`` with the
    driver's message.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize with model class

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get a record by ID

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance if found, None otherwise
        """
        id = parse_uuid(id)
        try:
            result = await db.execute(select(self.model).filter(self.model.id == id))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__} with ID {id}: {e}")
            raise StoreError(str(e))

    async def get_by_condition(self, db: AsyncSession, *, condition) -> List[ModelType]:
        """
        Get records by condition, oldest first

        Args:
            db: Database session
            condition: SQLAlchemy filter condition

        Returns:
            List of model instances
        """
        try:
            result = await db.execute(
                select(self.model)
                .filter(condition)
                .order_by(self.model.created_at.asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__} by condition: {e}")
            raise StoreError(str(e))

    async def add(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """
        Insert a record and commit

        Args:
            db: Database session
            db_obj: Transient model instance

        Returns:
            Persisted model instance, refreshed from the store
        """
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}")
            await db.rollback()
            raise StoreError(str(e))
