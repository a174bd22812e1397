# Domain Entities
# Pure business objects with no framework dependencies
from .newsletter import NewsletterIssue
from .subscriber import (
    DomainValidationError,
    NewSubscriber,
    SubscriberEmail,
    SubscriberName,
    parse_email,
    parse_name,
    parse_new_subscriber,
)

__all__ = [
    "DomainValidationError",
    "NewSubscriber",
    "NewsletterIssue",
    "SubscriberEmail",
    "SubscriberName",
    "parse_email",
    "parse_name",
    "parse_new_subscriber",
]
