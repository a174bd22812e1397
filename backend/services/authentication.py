"""
Credential verification for operators publishing newsletter issues.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security.credentials import Credentials
from core.security.password import DUMMY_PASSWORD_HASH
from infrastructure.database.models import User
from services.context import ServiceContext
from services.errors import AuthError, UnexpectedError

AUTH_FAILED_MESSAGE = "unknown username or invalid password"


async def get_stored_credentials(
    db: AsyncSession,
    username: str,
) -> tuple[UUID, str] | None:
    """Fetch ``(user_id, password_hash)`` for a username, or None."""
    result = await db.execute(
        select(User.user_id, User.password_hash).where(User.username == username)
    )
    row = result.one_or_none()
    if row is None:
        return None
    return row.user_id, row.password_hash


async def validate_credentials(
    ctx: ServiceContext,
    db: AsyncSession,
    credentials: Credentials,
) -> UUID:
    """
    Check a username/password pair against the stored Argon2 hash.

    An unknown username is verified against a dummy hash instead of
    returning early, so "no such user" and "wrong password" take the same
    time and produce the same error.

    Raises:
        AuthError: unknown username or wrong password
        UnexpectedError: lookup failed or the stored hash is unreadable
    """
    try:
        stored = await get_stored_credentials(db, credentials.username)
    except SQLAlchemyError as e:
        raise UnexpectedError("Failed to perform a query to validate auth credentials.") from e

    user_id: UUID | None = None
    expected_hash = DUMMY_PASSWORD_HASH
    if stored is not None:
        user_id, expected_hash = stored

    try:
        matches = await ctx.run_blocking(
            ctx.password_hasher.verify,
            credentials.password,
            expected_hash,
        )
    except ValueError as e:
        raise UnexpectedError("Failed to parse hash in PHC string format.") from e

    if not matches or user_id is None:
        raise AuthError(AUTH_FAILED_MESSAGE)

    ctx.logger.info("Authenticated publisher", extra={"user_id": str(user_id)})
    return user_id
