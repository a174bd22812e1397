"""
Operator account provisioning.
"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import User
from services.context import ServiceContext


async def ensure_user(
    ctx: ServiceContext,
    db: AsyncSession,
    username: str,
    password: str,
) -> UUID:
    """
    Create an operator account unless one with ``username`` already exists.

    An existing account keeps its current password hash. The new hash is
    computed on the context's blocking executor.

    Args:
        ctx: Service context providing the hasher and executor
        db: Database session
        username: Login name
        password: Plain text password for a newly created account

    Returns:
        The account's user id
    """
    result = await db.execute(select(User.user_id).where(User.username == username))
    existing = result.scalar_one_or_none()
    if existing is not None:
        return existing

    password_hash = await ctx.run_blocking(ctx.password_hasher.hash, password)
    user_id = uuid4()
    db.add(User(user_id=user_id, username=username, password_hash=password_hash))
    await db.commit()
    ctx.logger.info("Created operator account %s", username, extra={"user_id": str(user_id)})
    return user_id
