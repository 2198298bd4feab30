"""Health, readiness and liveness endpoints."""

import logging
from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from attendance_engine import __version__
from attendance_engine.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service health, including whether reports can reach their store."""

    status: Literal["healthy", "degraded"]
    version: str
    database: Literal["reachable", "unreachable"]
    checked_at: datetime


async def database_reachable() -> bool:
    """Run a trivial query against the configured database."""
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.warning("Database check failed", exc_info=True)
        return False
    return True


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Always 200; ``status`` is degraded while the database is unreachable."""
    reachable = await database_reachable()
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        version=__version__,
        database="reachable" if reachable else "unreachable",
        checked_at=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def readiness_check() -> JSONResponse:
    """Ready only when reports can be served."""
    if await database_reachable():
        return JSONResponse({"status": "ready", "database": "reachable"})
    return JSONResponse(
        {"status": "not_ready", "database": "unreachable"},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """The process is up; does not touch the database."""
    return {"status": "alive", "version": __version__}
