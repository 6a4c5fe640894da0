"""
Excel export of weekly reports.

Lays the report out the way the printable weekly page does: a header with
summary figures, then each day with its events, then a sheet of insights.
"""

from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import INSIGHT_LABELS, REPORT_TITLE, SUMMARY_LABELS, TASK_HEADERS
from models.tasks import DaySummary, Task, WeeklyReport
from services.reports import (
    calculate_task_duration,
    format_date_range,
    format_date_short,
    format_duration,
    format_time_display,
)

COLUMN_WIDTHS = [22, 36, 48, 12, 12]


def _plural_events(count: int) -> str:
    return f"{count} event{'' if count == 1 else 's'}"


def format_day_heading(day: DaySummary) -> str:
    """e.g. 'Monday, Dec 2 - 2 events - 1h 30m'."""
    heading = f"{day['day_name']}, {format_date_short(day['date'])}"
    if day["task_count"]:
        heading += f" - {_plural_events(day['task_count'])}"
        if day["total_duration"]:
            heading += f" - {format_duration(day['total_duration'])}"
    return heading


def task_row(task: Task) -> list:
    """Cells for one task line under its day heading."""
    time_range = (
        f"{format_time_display(task.get('start_time', ''))} - "
        f"{format_time_display(task.get('end_time', ''))}"
    )
    return [
        time_range,
        task.get("event", ""),
        task.get("description") or "",
        "Done" if task.get("completed") else "Pending",
        format_duration(calculate_task_duration(task)),
    ]


def summary_values(report: WeeklyReport) -> list:
    """Values matching SUMMARY_LABELS."""
    busiest = report["busiest_day"]
    return [
        report["total_tasks"],
        report["completed_tasks"],
        f"{report['completion_rate']}%",
        format_duration(report["total_duration"]),
        f"{busiest['day_name']} ({_plural_events(busiest['task_count'])})" if busiest else "",
    ]


def insight_values(report: WeeklyReport) -> list:
    """Values matching INSIGHT_LABELS."""
    busiest = report["busiest_day"]
    days_with_events = sum(1 for day in report["days_of_week"] if day["task_count"] > 0)
    return [
        f"{busiest['day_name']} with {_plural_events(busiest['task_count'])}"
        if busiest
        else "No events scheduled",
        round(report["total_tasks"] / 7, 1),
        format_duration(round(report["average_daily_duration"])),
        f"{days_with_events} out of 7",
    ]


# =============================================================================
# SHEET WRITERS
# =============================================================================


def write_excel_report_sheet(ws, report: WeeklyReport):
    """
    Write Sheet 1 - Weekly Report.

    Rows: title, date range, summary table, then one block per day
    (heading row, column headers, task rows or 'No events').
    """
    ws.cell(row=1, column=1, value=REPORT_TITLE).font = Font(bold=True, size=14)
    ws.cell(row=2, column=1, value=format_date_range(report["week_start"], report["week_end"]))

    # Summary table (row 4 labels, row 5 values)
    for col_idx, (label, value) in enumerate(
        zip(SUMMARY_LABELS, summary_values(report)), start=1
    ):
        ws.cell(row=4, column=col_idx, value=label).font = Font(bold=True)
        ws.cell(row=5, column=col_idx, value=value)

    row_idx = 7
    for day in report["days_of_week"]:
        ws.cell(row=row_idx, column=1, value=format_day_heading(day)).font = Font(bold=True)
        row_idx += 1

        if not day["tasks"]:
            ws.cell(row=row_idx, column=1, value="No events")
            row_idx += 2
            continue

        for col_idx, header in enumerate(TASK_HEADERS, start=1):
            ws.cell(row=row_idx, column=col_idx, value=header).font = Font(italic=True)
        row_idx += 1

        for task in day["tasks"]:
            for col_idx, value in enumerate(task_row(task), start=1):
                ws.cell(row=row_idx, column=col_idx, value=value)
            row_idx += 1
        row_idx += 1

    for col_idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def write_excel_insights_sheet(ws, report: WeeklyReport):
    """Write Sheet 2 - Insights (label / value pairs)."""
    ws.cell(row=1, column=1, value="Weekly Insights").font = Font(bold=True, size=14)
    for row_idx, (label, value) in enumerate(
        zip(INSIGHT_LABELS, insight_values(report)), start=3
    ):
        ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
        ws.cell(row=row_idx, column=2, value=value)
    ws.column_dimensions["A"].width = 26
    ws.column_dimensions["B"].width = 32


def build_weekly_workbook(report: WeeklyReport) -> Workbook:
    """Create the two-sheet workbook for a weekly report."""
    wb = Workbook()

    ws_report = wb.active
    ws_report.title = "Weekly Report"
    write_excel_report_sheet(ws_report, report)

    ws_insights = wb.create_sheet(title="Insights")
    write_excel_insights_sheet(ws_insights, report)

    return wb


def create_weekly_excel_report(report: WeeklyReport, output_path: Path):
    """Save the weekly report workbook to output_path."""
    wb = build_weekly_workbook(report)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}")


def weekly_report_to_bytes(report: WeeklyReport) -> bytes:
    """Render the weekly report workbook in memory (for API responses)."""
    buffer = BytesIO()
    build_weekly_workbook(report).save(buffer)
    return buffer.getvalue()
