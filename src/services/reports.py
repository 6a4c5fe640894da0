"""
Weekly report aggregation and display formatting helpers.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from core.config import DATE_FORMAT, DAY_NAMES, DAYS_IN_WEEK, DEFAULT_TIME, TIME_FORMAT
from models.tasks import DaySummary, Task, WeeklyReport

# =============================================================================
# DATE UTILITIES
# =============================================================================


def parse_date(value: str | None) -> date | None:
    """Parse 'YYYY-MM-DD' into a date, or None when missing/malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def parse_instant(date_str: str | None, time_str: str | None) -> datetime | None:
    """Combine 'YYYY-MM-DD' and 'HH:MM' into a naive datetime, or None."""
    day = parse_date(date_str)
    if day is None or not time_str:
        return None
    try:
        clock = datetime.strptime(time_str, TIME_FORMAT).time()
    except (TypeError, ValueError):
        return None
    return datetime.combine(day, clock)


def day_name(d: date) -> str:
    """Full English weekday name, independent of locale."""
    return DAY_NAMES[(d.weekday() + 1) % DAYS_IN_WEEK]


def get_week_start(d: date | None = None) -> str:
    """
    Get the start of the week (Sunday on or before d) as YYYY-MM-DD.

    Uses today if d is None.
    """
    if d is None:
        d = date.today()
    elif isinstance(d, datetime):
        d = d.date()
    start = d - timedelta(days=(d.weekday() + 1) % DAYS_IN_WEEK)
    return start.isoformat()


# =============================================================================
# TASK HELPERS
# =============================================================================


def calculate_task_duration(task: Task) -> int:
    """
    Duration of a task in whole minutes.

    Reversed ranges clamp to 0, as do tasks whose instants do not parse.
    A missing end date falls back to the start date.
    """
    start = parse_instant(task.get("date"), task.get("start_time"))
    end = parse_instant(task.get("end_date") or task.get("date"), task.get("end_time"))
    if start is None or end is None:
        return 0
    return max(0, math.floor((end - start).total_seconds() / 60))


def task_in_window(task: Task, week_start: date, week_end: date) -> bool:
    """Check whether the task's [date, end_date] span overlaps the window."""
    task_start = parse_date(task.get("date"))
    if task_start is None:
        return False
    if task.get("end_date"):
        task_end = parse_date(task["end_date"])
        if task_end is None:
            return False
    else:
        task_end = task_start
    return task_start <= week_end and task_end >= week_start


def _start_time(task: Task) -> str:
    return task.get("start_time") or DEFAULT_TIME


# =============================================================================
# WEEKLY REPORT
# =============================================================================


def generate_weekly_report(tasks: Iterable[Task], week_start: date | str) -> WeeklyReport:
    """
    Generate a weekly report for tasks within a specific week.

    A task is part of the week when its span overlaps the seven days,
    but it is listed only under the day it starts on.

    Args:
        tasks: Task records (not modified)
        week_start: First day of the week, as a date or YYYY-MM-DD string

    Returns:
        WeeklyReport with seven day buckets and summary statistics
    """
    if isinstance(week_start, str):
        week_start = datetime.strptime(week_start, DATE_FORMAT).date()
    elif isinstance(week_start, datetime):
        week_start = week_start.date()
    week_end = week_start + timedelta(days=DAYS_IN_WEEK - 1)

    # Stable sort: tasks starting at the same instant keep input order
    week_tasks = sorted(
        (task for task in tasks if task_in_window(task, week_start, week_end)),
        key=lambda task: (parse_date(task["date"]), _start_time(task)),
    )

    days_of_week: list[DaySummary] = []
    for offset in range(DAYS_IN_WEEK):
        current_day = week_start + timedelta(days=offset)
        day_tasks = sorted(
            (task for task in week_tasks if parse_date(task["date"]) == current_day),
            key=_start_time,
        )
        days_of_week.append(
            {
                "day_name": day_name(current_day),
                "date": current_day,
                "tasks": day_tasks,
                "total_duration": sum(calculate_task_duration(task) for task in day_tasks),
                "task_count": len(day_tasks),
            }
        )

    total_tasks = len(week_tasks)
    completed_tasks = sum(1 for task in week_tasks if task.get("completed"))
    total_duration = sum(calculate_task_duration(task) for task in week_tasks)

    # Round half up so 12.5% reports as 13
    completion_rate = math.floor(completed_tasks / total_tasks * 100 + 0.5) if total_tasks else 0

    # max() keeps the first of equal counts, i.e. the earliest day
    busiest_day = max(days_of_week, key=lambda day: day["task_count"])

    return {
        "week_start": week_start,
        "week_end": week_end,
        "days_of_week": days_of_week,
        "total_tasks": total_tasks,
        "completed_tasks": completed_tasks,
        "completion_rate": completion_rate,
        "total_duration": total_duration,
        "average_daily_duration": total_duration / DAYS_IN_WEEK,
        "busiest_day": busiest_day if busiest_day["task_count"] > 0 else None,
        "week_tasks": week_tasks,
    }


# =============================================================================
# DISPLAY FORMATTING
# =============================================================================


def format_duration(minutes: int) -> str:
    """Format minutes as '2h 5m', '1h' or '30m'."""
    hours, mins = divmod(int(minutes), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def format_time_display(time24: str) -> str:
    """Convert 'HH:MM' (24-hour) to '1:30 PM' style."""
    if not time24:
        return ""
    hours, _, minutes = time24.partition(":")
    hour = int(hours)
    ampm = "PM" if hour >= 12 else "AM"
    display_hour = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{display_hour}:{minutes} {ampm}"


def format_date_short(d: date) -> str:
    """Format date as 'Mon D' (platform-safe, e.g., 'Dec 1')."""
    return f"{d.strftime('%b')} {d.day}"


def format_date_long(d: date) -> str:
    """Format date as 'Sunday, December 1, 2024'."""
    return f"{day_name(d)}, {d.strftime('%B')} {d.day}, {d.year}"


def format_date_range(start: date, end: date) -> str:
    """User-friendly description of a date range."""
    return f"{format_date_long(start)} - {format_date_long(end)}"
