"""
Service layer for the subscription, confirmation and publishing workflows.
"""

from .confirmation import ConfirmationOutcome, confirm
from .context import ServiceContext
from .errors import AuthError, UnexpectedError, ValidationError, WorkflowError
from .newsletters import PublishReport, publish
from .subscriptions import subscribe
from .users import ensure_user

__all__ = [
    "AuthError",
    "ConfirmationOutcome",
    "PublishReport",
    "ServiceContext",
    "UnexpectedError",
    "ValidationError",
    "WorkflowError",
    "confirm",
    "ensure_user",
    "publish",
    "subscribe",
]
