"""Base model class for persisted records."""

from datetime import datetime
from uuid import UUID, uuid4

import pendulum
from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return pendulum.now("UTC")


class RecordModel(BaseModel):
    """Base model for records kept in the library."""

    id: UUID = Field(default_factory=uuid4, description="Record identifier")
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")

    class Config:
        """Pydantic config."""

        from_attributes = True
        frozen = True
