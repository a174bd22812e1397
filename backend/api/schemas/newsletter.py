"""
Newsletter publishing request schemas.
"""

from pydantic import BaseModel, Field

from core.domain.newsletter import NewsletterIssue


class NewsletterContent(BaseModel):
    """Both renditions of an issue's body."""

    html: str
    text: str


class PublishRequest(BaseModel):
    """Body of POST /newsletters."""

    title: str = Field(..., min_length=1)
    content: NewsletterContent

    def to_issue(self) -> NewsletterIssue:
        return NewsletterIssue(
            title=self.title,
            html=self.content.html,
            text=self.content.text,
        )
