"""Tests for the credential service, called directly against the database."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.config import Settings
from core.security import decode_access_token, verify_password
from models.user import User
from services import auth_service
from services.exceptions import AuthenticationError, ConflictError


async def test__signup__stores_hash_not_password(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """The stored credential is a bcrypt hash of the password."""
    await auth_service.signup(db_session, settings, "a@example.com", "pw-123456")

    user = await auth_service.get_user_by_email(db_session, "a@example.com")
    assert user is not None
    assert user.hash != "pw-123456"
    assert verify_password("pw-123456", user.hash)
    assert user.hash.startswith(f"$2b${settings.bcrypt_rounds:02d}$")


async def test__signup__token_subject_is_new_user_id(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """The issued token identifies the newly created user."""
    token = await auth_service.signup(db_session, settings, "a@example.com", "pw-123456")

    user = await auth_service.get_user_by_email(db_session, "a@example.com")
    payload = decode_access_token(settings, token.access_token)
    assert payload is not None
    assert int(payload["sub"]) == user.id


async def test__signup__duplicate_email_raises_conflict(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings,
) -> None:
    """A second signup for a committed email raises ConflictError."""
    async with session_factory() as session:
        await auth_service.signup(session, settings, "a@example.com", "pw-123456")
        await session.commit()

    async with session_factory() as session:
        with pytest.raises(ConflictError) as exc_info:
            await auth_service.signup(session, settings, "a@example.com", "other-pw")
        assert exc_info.value.status_code == 403
        await session.rollback()

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(User))
        assert count == 1


async def test__login__returns_token_for_valid_credentials(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """Correct credentials produce a token for that user."""
    await auth_service.signup(db_session, settings, "a@example.com", "pw-123456")

    token = await auth_service.login(db_session, settings, "a@example.com", "pw-123456")
    payload = decode_access_token(settings, token.access_token)
    assert payload is not None
    assert payload["email"] == "a@example.com"


async def test__login__unknown_email_raises(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """Unknown accounts are told to sign up first."""
    with pytest.raises(AuthenticationError, match="Please sign up first."):
        await auth_service.login(db_session, settings, "nobody@example.com", "pw")


async def test__login__wrong_password_raises(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """A wrong password is rejected."""
    await auth_service.signup(db_session, settings, "a@example.com", "pw-123456")

    with pytest.raises(AuthenticationError, match="Credentials incorrect."):
        await auth_service.login(db_session, settings, "a@example.com", "wrong")


async def test__issue_token__is_side_effect_free(
    db_session: AsyncSession, settings: Settings,
) -> None:
    """Issuing a token does not touch the database."""
    token = auth_service.issue_token(settings, 7, "x@example.com")

    assert decode_access_token(settings, token.access_token)["sub"] == "7"
    count = await db_session.scalar(select(func.count()).select_from(User))
    assert count == 0
