"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod

from ..domain.subscriber import SubscriberEmail


class EmailDeliveryError(Exception):
    """Raised when the email provider did not accept a message."""


class EmailService(ABC):
    """Abstract service for outbound email."""

    @abstractmethod
    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        """
        Send one message with both an HTML and a plain-text body.

        Raises:
            EmailDeliveryError: if the message could not be handed to the provider
        """
        ...
