"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from api.models.responses import HealthResponse
from core import config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(response: Response):
    """503 until scripts/init_db.py has created the request log database."""
    available = config.DB_PATH.exists()
    if not available:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if available else "unhealthy",
        version=config.API_VERSION,
        request_log_available=available,
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=None if available else f"Request log database not found at {config.DB_PATH}",
    )
