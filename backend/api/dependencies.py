"""
API dependencies for the shared service context.
"""

from typing import Annotated

from fastapi import Depends, Request

from services.context import ServiceContext


def get_service_context(request: Request) -> ServiceContext:
    """Return the service-scoped context built during application startup."""
    return request.app.state.service_context


def get_request_context(
    request: Request,
    ctx: Annotated[ServiceContext, Depends(get_service_context)],
) -> ServiceContext:
    """
    Dependency to get a context bound to the current request.

    Log records written through the returned context carry the request id
    assigned by the request-id middleware.
    """
    request_id = getattr(request.state, "request_id", None) or "-"
    return ctx.for_request(request_id)
