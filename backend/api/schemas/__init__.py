"""
API request and response schemas.
"""

from .newsletter import NewsletterContent, PublishRequest

__all__ = [
    "NewsletterContent",
    "PublishRequest",
]
