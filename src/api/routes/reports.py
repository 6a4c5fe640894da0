"""Task validation and weekly report endpoints."""

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from api.dependencies import get_client_ip, verify_api_key
from api.logging import (
    RequestLog,
    elapsed_ms,
    error_exception,
    save_request_log,
)
from api.models.responses import ErrorCodes
from api.models.tasks import (
    TaskListRequest,
    ValidationResponse,
    WeeklyReportRequest,
    WeeklyReportResponse,
)
from core.validation import validate_tasks
from services.exports import weekly_report_to_bytes
from services.reports import generate_weekly_report, get_week_start

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _start_log(request: Request, endpoint: str, task_count: int) -> RequestLog:
    return RequestLog(
        endpoint=endpoint,
        method="POST",
        client_ip=get_client_ip(request),
        tasks_received=task_count,
    )


def _internal_error(request_log: RequestLog, start_time: float, error: Exception) -> HTTPException:
    exc = error_exception(
        request_log, start_time, status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCodes.INTERNAL_ERROR, "Internal server error",
    )
    request_log.error_message = str(error)
    return exc


@router.post("/tasks/validate", response_model=ValidationResponse)
async def validate_tasks_endpoint(
    request: Request,
    body: TaskListRequest,
    _api_key: str = Depends(verify_api_key),
):
    """Run form validation over a task collection."""
    start_time = time.time()
    request_log = _start_log(request, "/v1/tasks/validate", len(body.tasks))

    try:
        errors = validate_tasks([task.model_dump() for task in body.tasks])

        request_log.status_code = 200
        for task_id, messages in errors.items():
            for message in messages:
                request_log.details.append(("validation_error", f"{task_id}: {message}"))
        request_log.processing_time_ms = elapsed_ms(start_time)

        return ValidationResponse(valid=not errors, errors=errors)

    except Exception as e:
        raise _internal_error(request_log, start_time, e)

    finally:
        save_request_log(request_log)


@router.post("/reports/weekly", response_model=WeeklyReportResponse)
async def weekly_report_endpoint(
    request: Request,
    body: WeeklyReportRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Aggregate tasks into a seven-day report.

    weekStart defaults to the Sunday of the current week.
    """
    start_time = time.time()
    request_log = _start_log(request, "/v1/reports/weekly", len(body.tasks))

    try:
        week_start = body.week_start or get_week_start()
        request_log.week_start = str(week_start)

        tasks = [task.model_dump() for task in body.tasks]
        report = await asyncio.to_thread(generate_weekly_report, tasks, week_start)

        request_log.status_code = 200
        request_log.tasks_returned = report["total_tasks"]
        request_log.processing_time_ms = elapsed_ms(start_time)

        return report

    except ValueError as e:
        raise error_exception(
            request_log, start_time, status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorCodes.VALIDATION_ERROR, "Invalid report request", [str(e)],
        )

    except Exception as e:
        raise _internal_error(request_log, start_time, e)

    finally:
        save_request_log(request_log)


@router.post("/reports/weekly/export")
async def weekly_report_export_endpoint(
    request: Request,
    body: WeeklyReportRequest,
    _api_key: str = Depends(verify_api_key),
):
    """Return the weekly report as an Excel workbook."""
    start_time = time.time()
    request_log = _start_log(request, "/v1/reports/weekly/export", len(body.tasks))

    try:
        week_start = body.week_start or get_week_start()
        request_log.week_start = str(week_start)

        tasks = [task.model_dump() for task in body.tasks]
        report = generate_weekly_report(tasks, week_start)
        excel_bytes = await asyncio.to_thread(weekly_report_to_bytes, report)

        request_log.status_code = 200
        request_log.tasks_returned = report["total_tasks"]
        request_log.processing_time_ms = elapsed_ms(start_time)

        output_filename = f"weekly_report_{report['week_start'].isoformat()}.xlsx"
        return Response(
            content=excel_bytes,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{output_filename}"'},
        )

    except ValueError as e:
        raise error_exception(
            request_log, start_time, status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorCodes.VALIDATION_ERROR, "Invalid report request", [str(e)],
        )

    except Exception as e:
        raise _internal_error(request_log, start_time, e)

    finally:
        save_request_log(request_log)
