"""
Newsletter publishing API routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_request_context
from api.schemas.newsletter import PublishRequest
from infrastructure.database.connection import get_db
from services.context import ServiceContext
from services.newsletters import publish

router = APIRouter(prefix="/newsletters", tags=["Newsletters"])


@router.post("", status_code=status.HTTP_200_OK)
async def publish_newsletter(
    body: PublishRequest,
    authorization: Annotated[str | None, Header()] = None,
    ctx: ServiceContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Send an issue to every confirmed subscriber.

    Requires HTTP Basic credentials. Responds 200 once every recipient has
    been attempted, whether or not each delivery succeeded.
    """
    await publish(ctx, db, authorization, body.to_issue())
    return Response(status_code=status.HTTP_200_OK)
