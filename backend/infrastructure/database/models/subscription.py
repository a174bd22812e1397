"""
Subscriber and confirmation token database models.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class SubscriptionStatus(str, Enum):
    """Subscriber lifecycle status."""

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


class Subscription(Base):
    """A person who asked to receive the newsletter."""

    __tablename__ = "subscriptions"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    # Unique at the schema level; the workflows do not check it themselves
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(32),
        default=SubscriptionStatus.PENDING_CONFIRMATION.value,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_subscriptions_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Subscription(id={self.id}, status={self.status})>"


class SubscriptionToken(Base):
    """Opaque token mapping a confirmation link to its subscriber."""

    __tablename__ = "subscription_tokens"

    subscription_token: Mapped[str] = mapped_column(Text, primary_key=True)
    subscriber_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("subscriptions.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        # The token itself is a bearer secret
        return f"<SubscriptionToken(subscriber_id={self.subscriber_id})>"
