"""Base models and utilities for the datastore module."""

from datetime import datetime, timezone

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseDocument(BaseModel):
    """Base model for all persisted entities.

    Unknown attributes are kept and persisted alongside the declared fields.
    """

    id: str = Field(default_factory=lambda: str(ObjectId()), alias="_id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(populate_by_name=True, extra="allow", from_attributes=True)

    def to_document(self) -> dict:
        """Dump the entity in the shape stored in MongoDB."""
        return self.model_dump(by_alias=True)
