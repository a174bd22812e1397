"""
Resend email service adapter.
"""

import asyncio
import logging
from typing import Optional

import resend

from core.domain.subscriber import SubscriberEmail
from core.interfaces.services import EmailDeliveryError, EmailService
from infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)


class ResendEmailService(EmailService):
    """Email service using the Resend API."""

    def __init__(
        self,
        sender: SubscriberEmail,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        if api_key:
            resend.api_key = api_key
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResendEmailService":
        """
        Build the adapter from application settings.

        Raises:
            DomainValidationError: if EMAIL_SENDER is not a valid address
        """
        return cls(
            sender=SubscriberEmail(settings.email_sender),
            api_key=settings.resend_api_key,
            timeout=settings.email_timeout_seconds,
        )

    @property
    def sender(self) -> SubscriberEmail:
        return self._sender

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        """
        Send one email through Resend.

        Args:
            recipient: Validated recipient address
            subject: Subject line
            html_body: HTML version of the message
            text_body: Plain-text version of the message

        Raises:
            EmailDeliveryError: if Resend rejects the message or does not answer in time
        """
        if not self._api_key:
            logger.info(
                "[DEV] Email to %s (%s):\n%s",
                recipient,
                subject,
                text_body,
            )
            return

        params = {
            "from": str(self._sender),
            "to": [str(recipient)],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }

        try:
            # The Resend client is synchronous; keep it off the event loop
            await asyncio.wait_for(
                asyncio.to_thread(resend.Emails.send, params),
                timeout=self._timeout,
            )
        except TimeoutError as e:
            raise EmailDeliveryError(
                f"Resend did not respond within {self._timeout}s"
            ) from e
        except Exception as e:
            raise EmailDeliveryError("Resend rejected the email") from e
