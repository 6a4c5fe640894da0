"""API route modules."""

from .calendar import router as calendar_router
from .health import router as health_router
from .reports import router as reports_router

__all__ = ["health_router", "calendar_router", "reports_router"]
