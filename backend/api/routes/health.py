"""Health check endpoints."""

import asyncio
import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import get_settings
from infrastructure.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

DB_CHECK_TIMEOUT_SECONDS = 5.0


async def check_database(db: AsyncSession) -> str:
    """Run a trivial query; return "connected" or a short error label."""
    try:
        await asyncio.wait_for(db.execute(text("SELECT 1")), timeout=DB_CHECK_TIMEOUT_SECONDS)
    except TimeoutError:
        logger.error("Health check DB timeout")
        return "error: database timeout"
    except Exception as e:
        logger.error("Health check DB error: %s", str(e))
        return "error: database check failed"
    return "connected"


def _app_info() -> dict:
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "email_transport": "resend" if settings.resend_api_key else "log",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health_check")
async def health_check_plain():
    """Liveness check: 200 with an empty body."""
    return Response(status_code=200)


@router.get("/health")
async def health_check():
    return {"status": "healthy", **_app_info()}


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """
    Health check including database connectivity.

    Answers 200 either way so dashboards can read the status; use
    ``/health/ready`` where a failing status code is needed.
    """
    db_status = await check_database(db)
    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "database": db_status,
        **_app_info(),
    }


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Readiness check: 503 until the database answers."""
    db_status = await check_database(db)
    ready = db_status == "connected"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"ready": ready, "database": db_status},
    )
