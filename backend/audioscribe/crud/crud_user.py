from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from audioscribe.core.exceptions import StoreError
from audioscribe.crud.base import CRUDBase
from audioscribe.models.models import User


class CRUDUser(CRUDBase[User]):
    """Store operations for the user model"""

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[User]:
        """Get user by exact email"""
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error looking up user by email: {e}")
            raise StoreError(str(e))

    async def create(
        self, db: AsyncSession, *, email: str, hashed_password: str, name: Optional[str] = None
    ) -> User:
        """Create a new user from an already hashed password

        A unique-constraint violation on ``email`` surfaces as ``StoreError``
        like any other store failure.
        """
        db_obj = User(email=email, password=hashed_password, name=name)
        return await self.add(db, db_obj)


user_crud = CRUDUser(User)
