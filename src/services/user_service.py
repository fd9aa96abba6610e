"""Service layer for the current user's profile."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import MAX_INTEGER_ID
from models.user import User
from schemas.user import UserUpdate
from services.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by primary key."""
    if not 1 <= user_id <= MAX_INTEGER_ID:
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def edit_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile update to the given user.

    Only fields present in the request are changed. The user is always the
    one resolved from the access token, so there is no way to target another
    account.

    Raises:
        ValidationError: If email is explicitly set to null.
        ConflictError: If the new email belongs to another account.
    """
    updates = data.model_dump(exclude_unset=True)
    if "email" in updates and updates["email"] is None:
        raise ValidationError("email cannot be null.")

    for field, value in updates.items():
        setattr(user, field, value)

    try:
        await db.flush()
    except IntegrityError as e:
        logger.info("user_email_conflict", extra={"user_id": user.id})
        raise ConflictError("User already exists.") from e

    await db.refresh(user)
    return user
