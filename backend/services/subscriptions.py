"""
Double opt-in subscription workflow.

A new subscriber and their confirmation token are written in one
transaction; the confirmation email goes out only after that transaction
has committed, so every link we send resolves to a stored token.
"""

import secrets
import string
from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.subscriber import DomainValidationError, NewSubscriber, parse_new_subscriber
from core.interfaces.services import EmailDeliveryError
from infrastructure.database.models import Subscription, SubscriptionStatus, SubscriptionToken
from services.context import ServiceContext
from services.errors import UnexpectedError, ValidationError

TOKEN_LENGTH = 25
_TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    """Return a random 25-character alphanumeric token from a CSPRNG."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def confirmation_link(base_url: str, token: str) -> str:
    return f"{base_url}/subscriptions/confirm?subscription_token={token}"


async def insert_subscriber(db: AsyncSession, new_subscriber: NewSubscriber) -> UUID:
    """Stage a pending subscriber in the current transaction and return its id."""
    subscriber_id = uuid4()
    db.add(
        Subscription(
            id=subscriber_id,
            email=str(new_subscriber.email),
            name=str(new_subscriber.name),
            subscribed_at=datetime.now(UTC),
            status=SubscriptionStatus.PENDING_CONFIRMATION.value,
        )
    )
    await db.flush()
    return subscriber_id


async def store_token(db: AsyncSession, subscriber_id: UUID, token: str) -> None:
    db.add(SubscriptionToken(subscription_token=token, subscriber_id=subscriber_id))
    await db.flush()


async def send_confirmation_email(
    ctx: ServiceContext,
    new_subscriber: NewSubscriber,
    token: str,
) -> None:
    """Send the opt-in email; HTML and text bodies carry the same link."""
    link = confirmation_link(ctx.base_url, token)
    text_body = (
        "Welcome to our newsletter!\n"
        f"Visit {link} to confirm your subscription."
    )
    html_body = (
        "Welcome to our newsletter!<br />"
        f'Click <a href="{link}">here</a> to confirm your subscription.'
    )
    await ctx.email_client.send_email(
        new_subscriber.email,
        f"Welcome {new_subscriber.name}!",
        html_body,
        text_body,
    )


async def subscribe(
    ctx: ServiceContext,
    db: AsyncSession,
    raw_name: str,
    raw_email: str,
) -> UUID:
    """
    Register a pending subscriber and email them a confirmation link.

    Args:
        ctx: Service context
        db: Database session with no transaction in progress
        raw_name: Name exactly as submitted
        raw_email: Email exactly as submitted

    Returns:
        The new subscriber's id

    Raises:
        ValidationError: the name and/or email broke domain rules
        UnexpectedError: the transaction failed (nothing is persisted), or the
            email could not be sent (subscriber and token stay persisted)
    """
    try:
        new_subscriber = parse_new_subscriber(raw_name, raw_email)
    except DomainValidationError as e:
        raise ValidationError(str(e)) from e

    log_extra = {"subscriber_email": str(new_subscriber.email)}

    try:
        subscriber_id = await insert_subscriber(db, new_subscriber)
    except SQLAlchemyError as e:
        await db.rollback()
        raise UnexpectedError("Failed to insert new subscriber in the database.") from e

    token = generate_subscription_token()
    try:
        await store_token(db, subscriber_id, token)
    except SQLAlchemyError as e:
        await db.rollback()
        raise UnexpectedError(
            "Failed to store the confirmation token for a new subscriber."
        ) from e

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise UnexpectedError(
            "Failed to commit SQL transaction to store a new subscriber."
        ) from e

    ctx.logger.info("Saved new pending subscriber %s", subscriber_id, extra=log_extra)

    try:
        await send_confirmation_email(ctx, new_subscriber, token)
    except EmailDeliveryError as e:
        raise UnexpectedError("Failed to send a confirmation email.") from e

    ctx.logger.info("Sent confirmation email", extra=log_extra)
    return subscriber_id
