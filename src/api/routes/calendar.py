"""Calendar import endpoint."""

import asyncio
import time
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from api.dependencies import get_client_ip, verify_api_key
from api.logging import (
    RequestLog,
    elapsed_ms,
    error_exception,
    record_http_error,
    save_request_log,
)
from api.models.responses import ErrorCodes
from api.models.tasks import ImportResponse
from core.config import MAX_UPLOAD_SIZE_BYTES
from core.validation import validate_tasks
from services.calendar import CalendarFormatError, parse_calendar_file

router = APIRouter(prefix="/v1")


def _parse_in_thread(content: bytes) -> tuple[list[dict], dict[str, list[str]]]:
    """Decode, parse and validate an uploaded calendar file."""
    text = content.decode("utf-8-sig")
    tasks = parse_calendar_file(text)
    return tasks, validate_tasks(tasks)


@router.post("/calendar/import", response_model=ImportResponse)
async def import_calendar_endpoint(
    request: Request,
    file: Annotated[UploadFile, File(description="iCalendar (.ics) file")],
    _api_key: str = Depends(verify_api_key),
):
    """
    Convert an uploaded .ics file into task records.

    Events without both a start and an end are skipped. Tasks that would
    fail form validation (e.g. no title) are returned with warnings.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/calendar/import",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename,
    )

    try:
        if not file.filename:
            raise error_exception(
                request_log, start_time, status.HTTP_400_BAD_REQUEST,
                ErrorCodes.INVALID_REQUEST, "No file provided",
            )

        if not file.filename.lower().endswith(".ics"):
            raise error_exception(
                request_log, start_time, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                ErrorCodes.UNSUPPORTED_MEDIA_TYPE, "File is not an iCalendar document",
                [f"Received: {file.filename}"],
            )

        content = await file.read()
        request_log.file_size_bytes = len(content)

        if len(content) > MAX_UPLOAD_SIZE_BYTES:
            max_mb = MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise error_exception(
                request_log, start_time, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                ErrorCodes.FILE_TOO_LARGE, f"File exceeds maximum size of {max_mb} MB",
                [f"File size: {len(content) / (1024 * 1024):.1f} MB"],
            )

        tasks, warnings = await asyncio.to_thread(_parse_in_thread, content)

        request_log.status_code = 200
        request_log.tasks_returned = len(tasks)
        for task_id, messages in warnings.items():
            for message in messages:
                request_log.details.append(("warning", f"{task_id}: {message}"))
        request_log.processing_time_ms = elapsed_ms(start_time)

        return ImportResponse(tasks=tasks, warnings=warnings)

    except HTTPException as e:
        if not request_log.status_code:
            record_http_error(request_log, e, start_time)
        raise

    except (CalendarFormatError, UnicodeDecodeError) as e:
        raise error_exception(
            request_log, start_time, status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorCodes.FORMAT_ERROR, "File is not a readable calendar",
            [str(e)], detail_type="format_error",
        )

    except Exception as e:
        exc = error_exception(
            request_log, start_time, status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCodes.INTERNAL_ERROR, "Internal server error",
        )
        request_log.error_message = str(e)
        raise exc

    finally:
        # Always log the request
        save_request_log(request_log)
