"""Newsletter issue domain entity."""
from dataclasses import dataclass


@dataclass(frozen=True)
class NewsletterIssue:
    """One issue to broadcast; never persisted."""

    title: str
    html: str
    text: str
