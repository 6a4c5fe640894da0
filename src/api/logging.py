"""SQLite request logging for API."""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from fastapi import HTTPException

from api.models.responses import error_body
from core.database import get_connection


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    file_size_bytes: int | None = None
    file_name: str | None = None
    week_start: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    tasks_received: int | None = None
    tasks_returned: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog, db_path: Path | None = None) -> None:
    """Write request log to SQLite database."""
    conn = get_connection(db_path)
    try:
        cursor = conn.cursor()

        # Insert main request record
        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                file_size_bytes, file_name, week_start,
                status_code, error_code, error_message, processing_time_ms,
                tasks_received, tasks_returned
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.file_size_bytes,
                log.file_name,
                log.week_start,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.tasks_received,
                log.tasks_returned,
            ),
        )

        # Insert detail records
        for detail_type, message in log.details:
            cursor.execute(
                """
                INSERT INTO api_request_details (request_id, detail_type, message)
                VALUES (?, ?, ?)
            """,
                (log.request_id, detail_type, message),
            )

        conn.commit()
    finally:
        conn.close()


def elapsed_ms(start_time: float) -> int:
    """Milliseconds since start_time (a time.time() value)."""
    return int((time.time() - start_time) * 1000)


def record_http_error(log: RequestLog, exc: HTTPException, start_time: float) -> None:
    """Copy an HTTPException's status and detail into the request log."""
    log.status_code = exc.status_code
    if isinstance(exc.detail, dict):
        log.error_code = exc.detail.get("code")
        log.error_message = exc.detail.get("error")
        for detail in exc.detail.get("details", []):
            log.details.append(("validation_error", detail))
    else:
        log.error_message = str(exc.detail)
    log.processing_time_ms = elapsed_ms(start_time)


def error_exception(
    log: RequestLog,
    start_time: float,
    status_code: int,
    code: str,
    error: str,
    details: list[str] | None = None,
    detail_type: str = "validation_error",
) -> HTTPException:
    """Record a failure in the request log and build the HTTPException to raise."""
    details = details or []
    log.status_code = status_code
    log.error_code = code
    log.error_message = error
    log.processing_time_ms = elapsed_ms(start_time)
    for detail in details:
        log.details.append((detail_type, detail))
    return HTTPException(status_code=status_code, detail=error_body(code, error, details))


def save_request_log(log: RequestLog) -> None:
    """Always-safe wrapper: a logging failure must not fail the request."""
    try:
        log_request(log)
    except Exception:
        pass
