"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field

from schemas.base import CamelModel


class UserUpdate(CamelModel):
    """Partial profile update. Only these fields can be changed."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)


class UserResponse(CamelModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
