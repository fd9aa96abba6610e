"""Credential service: signup, login, and access token issuance."""
import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import create_access_token, hash_password, verify_password
from models.user import User
from schemas.auth import TokenResponse
from services.exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)


def issue_token(settings: Settings, user_id: int, email: str) -> TokenResponse:
    """Sign a short-lived access token for the user."""
    return TokenResponse(access_token=create_access_token(settings, user_id, email))


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by exact (case-sensitive) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def signup(
    db: AsyncSession,
    settings: Settings,
    email: str,
    password: str,
) -> TokenResponse:
    """
    Create an account and return an access token for it.

    Uniqueness is left to the database constraint rather than checked up front,
    so two concurrent signups for the same email cannot both succeed.

    Raises:
        ConflictError: If the email is already registered.
    """
    hashed = await run_in_threadpool(hash_password, password, settings.bcrypt_rounds)
    user = User(email=email, hash=hashed)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        logger.info("signup_conflict")
        raise ConflictError("User already exists.") from e

    logger.info("user_signed_up", extra={"user_id": user.id})
    return issue_token(settings, user.id, user.email)


async def login(
    db: AsyncSession,
    settings: Settings,
    email: str,
    password: str,
) -> TokenResponse:
    """
    Verify credentials and return an access token.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
    """
    user = await get_user_by_email(db, email)
    if user is None:
        logger.info("login_failed", extra={"reason": "unknown_email"})
        raise AuthenticationError("Please sign up first.")

    matches = await run_in_threadpool(verify_password, password, user.hash)
    if not matches:
        logger.info("login_failed", extra={"reason": "bad_password", "user_id": user.id})
        raise AuthenticationError("Credentials incorrect.")

    return issue_token(settings, user.id, user.email)
