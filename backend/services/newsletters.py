"""
Newsletter broadcast workflow.

Only authenticated operators may publish. Each confirmed subscriber gets
the issue in turn; a failed delivery is logged and skipped so one bad
recipient cannot block everyone else.
"""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.newsletter import NewsletterIssue
from core.domain.subscriber import DomainValidationError, SubscriberEmail
from core.interfaces.services import EmailDeliveryError
from core.security.credentials import CredentialsError, parse_basic_credentials
from infrastructure.database.models import Subscription, SubscriptionStatus
from services.authentication import validate_credentials
from services.context import ServiceContext
from services.errors import AuthError, UnexpectedError, error_chain_fmt


@dataclass
class PublishReport:
    """Per-call delivery tally; logged, never returned to the caller."""

    delivered: int = 0
    failed: int = 0
    skipped: int = 0


async def get_confirmed_subscribers(
    db: AsyncSession,
) -> list[SubscriberEmail | DomainValidationError]:
    """
    Load the email of every confirmed subscriber.

    Stored addresses are parsed again because rows may predate the current
    validation rules; an address that no longer parses is returned as its
    DomainValidationError instead of failing the whole load.
    """
    result = await db.execute(
        select(Subscription.email).where(
            Subscription.status == SubscriptionStatus.CONFIRMED.value
        )
    )
    recipients: list[SubscriberEmail | DomainValidationError] = []
    for email in result.scalars().all():
        try:
            recipients.append(SubscriberEmail(email))
        except DomainValidationError as e:
            recipients.append(e)
    return recipients


async def publish(
    ctx: ServiceContext,
    db: AsyncSession,
    authorization: str | None,
    issue: NewsletterIssue,
) -> PublishReport:
    """
    Authenticate the caller and send ``issue`` to all confirmed subscribers.

    Args:
        ctx: Service context
        db: Database session
        authorization: Raw Authorization header value, if any
        issue: Title and bodies of the issue

    Returns:
        Delivery tally for logging

    Raises:
        AuthError: header missing/malformed, unknown user or wrong password
        UnexpectedError: credentials or subscribers could not be loaded
    """
    try:
        credentials = parse_basic_credentials(authorization)
    except CredentialsError as e:
        raise AuthError(str(e)) from e

    user_id = await validate_credentials(ctx, db, credentials)

    try:
        recipients = await get_confirmed_subscribers(db)
        # Read-only so far; release the connection before the send loop
        await db.rollback()
    except SQLAlchemyError as e:
        raise UnexpectedError("Failed to load confirmed subscribers.") from e

    report = PublishReport()
    for recipient in recipients:
        if isinstance(recipient, DomainValidationError):
            ctx.logger.warning(
                "Skipping a confirmed subscriber. Their stored contact details are invalid\n%s",
                error_chain_fmt(recipient),
            )
            report.skipped += 1
            continue

        try:
            await ctx.email_client.send_email(recipient, issue.title, issue.html, issue.text)
        except EmailDeliveryError as e:
            ctx.logger.error(
                "Failed to send newsletter issue to %s\n\nCaused by:\n\t%s",
                recipient,
                error_chain_fmt(e).replace("\n", "\n\t"),
                extra={"subscriber_email": str(recipient)},
            )
            report.failed += 1
            continue

        report.delivered += 1

    ctx.logger.info(
        "Published newsletter issue %r: %d delivered, %d failed, %d skipped",
        issue.title,
        report.delivered,
        report.failed,
        report.skipped,
        extra={"user_id": str(user_id)},
    )
    return report
