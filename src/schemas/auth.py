"""Pydantic schemas for signup/login endpoints."""
from pydantic import BaseModel, EmailStr, Field, field_validator

from core.security import BCRYPT_MAX_PASSWORD_BYTES


class AuthRequest(BaseModel):
    """Credentials submitted to /auth/signup and /auth/login."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes.",
            )
        return v


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str
