"""API Pydantic models."""

from .responses import ErrorCodes, ErrorResponse, HealthResponse
from .tasks import (
    ImportResponse,
    TaskListRequest,
    TaskModel,
    ValidationResponse,
    WeeklyReportRequest,
    WeeklyReportResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "TaskModel",
    "TaskListRequest",
    "WeeklyReportRequest",
    "WeeklyReportResponse",
    "ImportResponse",
    "ValidationResponse",
]
