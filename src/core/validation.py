"""
Task validation.

Mirrors the checks the task form applies before a task is saved. The
weekly report never calls this: it tolerates malformed tasks on its own.
"""

from datetime import datetime

from core.config import DATE_FORMAT, TIME_FORMAT
from models.tasks import Task


def _valid(value: str | None, fmt: str) -> bool:
    if not value:
        return False
    try:
        datetime.strptime(value, fmt)
    except (TypeError, ValueError):
        return False
    return True


def validate_task(task: Task) -> list[str]:
    """
    Validate a single task record.

    Checks:
    1. Event title is present
    2. Dates are YYYY-MM-DD and times are HH:MM
    3. End is not before start
    """
    errors = []

    if not (task.get("event") or "").strip():
        errors.append("Missing event title")

    fields = [
        ("date", DATE_FORMAT, "start date"),
        ("start_time", TIME_FORMAT, "start time"),
        ("end_date", DATE_FORMAT, "end date"),
        ("end_time", TIME_FORMAT, "end time"),
    ]
    format_ok = True
    for key, fmt, label in fields:
        if not _valid(task.get(key), fmt):
            errors.append(f"Invalid {label} '{task.get(key) or ''}'")
            format_ok = False

    # Only compare instants once every part has parsed
    if format_ok:
        start = datetime.strptime(f"{task['date']} {task['start_time']}", f"{DATE_FORMAT} {TIME_FORMAT}")
        end = datetime.strptime(f"{task['end_date']} {task['end_time']}", f"{DATE_FORMAT} {TIME_FORMAT}")
        if end < start:
            errors.append("End must be after start")

    return errors


def validate_tasks(tasks: list[Task]) -> dict[str, list[str]]:
    """Validate tasks and return error messages keyed by task id (problems only)."""
    problems: dict[str, list[str]] = {}
    for index, task in enumerate(tasks):
        errors = validate_task(task)
        if errors:
            problems[task.get("id") or f"#{index}"] = errors
    return problems
