"""
Subscription confirmation workflow.
"""

from enum import Enum
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import Subscription, SubscriptionStatus, SubscriptionToken
from services.context import ServiceContext
from services.errors import error_chain_fmt


class ConfirmationOutcome(int, Enum):
    """Result of following a confirmation link, valued as its HTTP status."""

    CONFIRMED = 200
    UNKNOWN_TOKEN = 401
    INTERNAL_ERROR = 500

    @property
    def status_code(self) -> int:
        return self.value


async def get_subscriber_id_from_token(db: AsyncSession, token: str) -> UUID | None:
    result = await db.execute(
        select(SubscriptionToken.subscriber_id).where(
            SubscriptionToken.subscription_token == token
        )
    )
    return result.scalar_one_or_none()


async def confirm_subscriber(db: AsyncSession, subscriber_id: UUID) -> None:
    """Mark a subscriber confirmed. Confirming twice leaves the status unchanged."""
    await db.execute(
        update(Subscription)
        .where(Subscription.id == subscriber_id)
        .values(status=SubscriptionStatus.CONFIRMED.value)
    )
    await db.commit()


async def confirm(ctx: ServiceContext, db: AsyncSession, token: str) -> ConfirmationOutcome:
    """
    Resolve a confirmation token and confirm its subscriber.

    Unknown, forged and mistyped tokens are indistinguishable to the caller.
    Storage failures are logged and reported as INTERNAL_ERROR without
    saying which step failed.
    """
    try:
        subscriber_id = await get_subscriber_id_from_token(db, token)
    except SQLAlchemyError as e:
        ctx.logger.error("Failed to look up subscription token\n%s", error_chain_fmt(e))
        return ConfirmationOutcome.INTERNAL_ERROR

    if subscriber_id is None:
        ctx.logger.info("Rejected confirmation with an unknown token")
        return ConfirmationOutcome.UNKNOWN_TOKEN

    try:
        await confirm_subscriber(db, subscriber_id)
    except SQLAlchemyError as e:
        await db.rollback()
        ctx.logger.error(
            "Failed to mark subscriber %s as confirmed\n%s",
            subscriber_id,
            error_chain_fmt(e),
        )
        return ConfirmationOutcome.INTERNAL_ERROR

    ctx.logger.info("Confirmed subscriber %s", subscriber_id)
    return ConfirmationOutcome.CONFIRMED
