"""API routes."""

from attendance_engine.api.routes.health import router as health_router
from attendance_engine.api.routes.reports import router as reports_router

__all__ = ["health_router", "reports_router"]
