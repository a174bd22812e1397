"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .subscription import Subscription, SubscriptionStatus, SubscriptionToken
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "Subscription",
    "SubscriptionStatus",
    "SubscriptionToken",
    "User",
]
