"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import MAX_INTEGER_ID
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import NotFoundOrForbiddenError, ValidationError

logger = logging.getLogger(__name__)

# Columns that must never be set to null through an update
_REQUIRED_FIELDS = ("title", "link")


async def get_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Return all of the user's bookmarks in creation order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id.asc()),
    )
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, user_id: int, bookmark_id: int) -> Bookmark:
    """
    Fetch a single bookmark owned by the user.

    The owner filter is part of the query, so another user's bookmark is
    indistinguishable from a missing one.

    Raises:
        NotFoundOrForbiddenError: If no bookmark with that id belongs to the user.
    """
    if not 1 <= bookmark_id <= MAX_INTEGER_ID:
        raise NotFoundOrForbiddenError("Bookmark")
    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    bookmark = result.scalar_one_or_none()
    if bookmark is None:
        raise NotFoundOrForbiddenError("Bookmark")
    return bookmark


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """Create a bookmark owned by the user."""
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        description=data.description,
        link=data.link,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.debug("bookmark_created", extra={"user_id": user_id, "bookmark_id": bookmark.id})
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply the supplied fields to one of the user's bookmarks.

    Raises:
        NotFoundOrForbiddenError: If the bookmark is missing or not the user's.
        ValidationError: If title or link is explicitly set to null.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)

    updates = data.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in updates and updates[field] is None:
            raise ValidationError(f"{field} cannot be null.")

    for field, value in updates.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(db: AsyncSession, user_id: int, bookmark_id: int) -> None:
    """
    Delete one of the user's bookmarks.

    Raises:
        NotFoundOrForbiddenError: If the bookmark is missing or not the user's.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    await db.delete(bookmark)
    await db.flush()
    logger.debug("bookmark_deleted", extra={"user_id": user_id, "bookmark_id": bookmark_id})
