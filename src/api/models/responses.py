"""Health and error payloads shared by every route."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    request_log_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Body of every error reply, nested under FastAPI's 'detail' for HTTPException."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    # 400 / 401
    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    # Upload checks (413 / 415)
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    # 422: unreadable calendar vs. bad request values
    FORMAT_ERROR = "FORMAT_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    # 500
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_body(code: str, error: str, details: list[str] | None = None) -> dict:
    """Serialized ErrorResponse."""
    return ErrorResponse(error=error, code=code, details=details or []).model_dump()
