# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .services import EmailDeliveryError, EmailService

__all__ = [
    "EmailDeliveryError",
    "EmailService",
]
