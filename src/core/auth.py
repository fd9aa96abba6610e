"""Bearer token authentication dependency."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import decode_access_token
from db.session import get_async_session
from models.user import User
from services.user_service import get_user

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields our 401 rather than FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Resolve the caller from the ``Authorization: Bearer <token>`` header.

    The user id comes only from the verified token's ``sub`` claim. The user
    is loaded through the request's session so services can modify it.

    Raises:
        HTTPException: 401 if the header is missing, the token is invalid or
            expired, or the user no longer exists.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(settings, credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired token") from None

    user = await get_user(db, user_id)
    if user is None:
        logger.warning("token_user_missing", extra={"user_id": user_id})
        raise _unauthorized("User not found")
    return user
