"""
Subscription API routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_request_context
from infrastructure.database.connection import get_db
from services.confirmation import confirm
from services.context import ServiceContext
from services.subscriptions import subscribe

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("", status_code=status.HTTP_200_OK)
async def create_subscription(
    name: Annotated[str, Form()],
    email: Annotated[str, Form()],
    ctx: ServiceContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Register a pending subscriber and send them a confirmation email.

    Only after following the emailed link do they receive newsletter issues.
    """
    ctx.logger.info("Adding a new subscriber", extra={"subscriber_email": email})
    await subscribe(ctx, db, name, email)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/confirm")
async def confirm_subscription(
    subscription_token: Annotated[str, Query()],
    ctx: ServiceContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Confirm the subscriber identified by the token in an emailed link."""
    outcome = await confirm(ctx, db, subscription_token)
    return Response(status_code=outcome.status_code)
