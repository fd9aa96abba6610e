"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import ConfigDict, Field

from schemas.base import CamelModel


class BookmarkCreate(CamelModel):
    """Schema for creating a new bookmark."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    # Stored as given; no URL normalization
    link: str = Field(min_length=1)


class BookmarkUpdate(CamelModel):
    """
    Schema for updating an existing bookmark.

    Only fields present in the request body are applied. title and link are
    required columns, so an explicit null for either is rejected by the
    service layer.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    link: str | None = Field(default=None, min_length=1)


class BookmarkResponse(CamelModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    link: str
    created_at: datetime
    updated_at: datetime
