from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TimestampedBase(BaseModel):
    """Base schema for store records with a creation timestamp"""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class IdentifiedBase(TimestampedBase):
    """Base schema for store records with ID and timestamp"""
    id: UUID

    model_config = ConfigDict(from_attributes=True)
