"""
Data models for tasks and weekly reports.

Task records travel as plain dictionaries between the calendar parser,
the report aggregator and the outer layers; these TypedDicts describe
their shape.
"""

from datetime import date
from typing import NotRequired, TypedDict


class Task(TypedDict):
    """Task record (snake_case keys; camelCase on the wire)."""
    id: str
    event: str
    description: str
    date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    end_date: str  # YYYY-MM-DD
    end_time: str  # HH:MM
    completed: NotRequired[bool]


class DaySummary(TypedDict):
    """One of the seven day buckets of a weekly report."""
    day_name: str
    date: date
    tasks: list[Task]
    total_duration: int  # minutes
    task_count: int


class WeeklyReport(TypedDict):
    """Seven-day aggregation of a task collection."""
    week_start: date
    week_end: date
    days_of_week: list[DaySummary]
    total_tasks: int
    completed_tasks: int
    completion_rate: int  # percent
    total_duration: int  # minutes
    average_daily_duration: float  # minutes
    busiest_day: DaySummary | None
    week_tasks: list[Task]


# Python keys -> JSON keys used by the app and the .json task files
WIRE_NAMES = {
    "start_time": "startTime",
    "end_date": "endDate",
    "end_time": "endTime",
}


def task_to_wire(task: Task) -> dict:
    """Convert a task record to its camelCase JSON form."""
    return {WIRE_NAMES.get(key, key): value for key, value in task.items()}


def task_from_wire(data: dict) -> Task:
    """Convert a camelCase JSON task into a task record."""
    python_names = {wire: key for key, wire in WIRE_NAMES.items()}
    return {python_names.get(key, key): value for key, value in data.items()}
