"""
Pydantic models for task and weekly report payloads.

Fields are snake_case in Python and camelCase on the wire, matching the
task records the web app stores.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskModel(CamelModel):
    """A task record as exchanged with clients."""

    id: str | None = None
    event: str = ""
    description: str = ""
    date: str = ""
    start_time: str = ""
    end_date: str = ""
    end_time: str = ""
    completed: bool = False


class TaskListRequest(CamelModel):
    """Request body carrying a task collection."""

    tasks: list[TaskModel]


class WeeklyReportRequest(TaskListRequest):
    """Weekly report request; week_start defaults to the current week."""

    week_start: dt.date | None = None


class DaySummaryModel(CamelModel):
    day_name: str
    date: dt.date
    tasks: list[TaskModel]
    total_duration: int
    task_count: int


class WeeklyReportResponse(CamelModel):
    """Weekly report as returned to the display layer."""

    week_start: dt.date
    week_end: dt.date
    days_of_week: list[DaySummaryModel]
    total_tasks: int
    completed_tasks: int
    completion_rate: int
    total_duration: int
    average_daily_duration: float
    busiest_day: DaySummaryModel | None = None
    week_tasks: list[TaskModel]


class ImportResponse(CamelModel):
    """Tasks parsed from an uploaded calendar file."""

    tasks: list[TaskModel]
    warnings: dict[str, list[str]] = {}


class ValidationResponse(CamelModel):
    valid: bool
    errors: dict[str, list[str]] = {}
