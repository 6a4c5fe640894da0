#!/usr/bin/env python3
"""
Create a weekly task report from a JSON task file.

Prints a day-by-day summary and optionally saves an Excel workbook.

Usage:
    uv run python src/scripts/create_weekly_report.py tasks.json --date 2024-12-04 --xlsx
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR
from models.tasks import Task, WeeklyReport, task_from_wire
from services.exports import create_weekly_excel_report
from services.reports import (
    format_date_range,
    format_date_short,
    format_duration,
    format_time_display,
    generate_weekly_report,
    get_week_start,
)


# =============================================================================
# INPUT
# =============================================================================


def load_tasks(path: Path) -> list[Task]:
    """Read a JSON array of camelCase task objects."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of tasks")
    return [task_from_wire(item) for item in data]


def resolve_week_start(as_of_date_str: str | None) -> str:
    """
    Week start (Sunday) for the week containing the as-of date.

    Args:
        as_of_date_str: Optional date string (YYYY-MM-DD). Uses today if None.
    """
    if as_of_date_str:
        as_of = datetime.strptime(as_of_date_str, "%Y-%m-%d").date()
    else:
        as_of = date.today()
    return get_week_start(as_of)


# =============================================================================
# TEXT SUMMARY
# =============================================================================


def format_report_text(report: WeeklyReport) -> str:
    """Plain-text rendering of a weekly report."""
    lines = [
        "Weekly Schedule Report",
        format_date_range(report["week_start"], report["week_end"]),
        "",
        f"Total events:    {report['total_tasks']}",
        f"Completed:       {report['completed_tasks']} ({report['completion_rate']}%)",
        f"Total duration:  {format_duration(report['total_duration'])}",
    ]
    busiest = report["busiest_day"]
    if busiest:
        lines.append(f"Busiest day:     {busiest['day_name']} ({busiest['task_count']} events)")
    lines.append("")

    for day in report["days_of_week"]:
        header = f"{day['day_name']}, {format_date_short(day['date'])}"
        if day["task_count"]:
            header += f" - {day['task_count']} event(s), {format_duration(day['total_duration'])}"
        lines.append(header)
        if not day["tasks"]:
            lines.append("  No events")
        for task in day["tasks"]:
            mark = "x" if task.get("completed") else " "
            lines.append(
                f"  [{mark}] {format_time_display(task.get('start_time', ''))}"
                f" - {format_time_display(task.get('end_time', ''))}  {task.get('event', '')}"
            )
    return "\n".join(lines)


# =============================================================================
# MAIN
# =============================================================================


def main(tasks_path: Path, as_of_date_str: str | None = None, xlsx: Path | bool | None = None):
    """Main entry point."""
    week_start = resolve_week_start(as_of_date_str)
    tasks = load_tasks(tasks_path)
    print(f"Loaded {len(tasks)} task(s) from {tasks_path.name}")

    report = generate_weekly_report(tasks, week_start)
    print()
    print(format_report_text(report))

    if xlsx:
        output_path = xlsx if isinstance(xlsx, Path) else (
            OUTPUT_DIR / "reports" / "weekly" / f"weekly_report_{week_start}.xlsx"
        )
        print()
        create_weekly_excel_report(report, output_path)

    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate weekly task report")
    parser.add_argument("tasks_file", type=Path, help="JSON file with the task collection")
    parser.add_argument(
        "--date",
        help="Any day in the report week (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--xlsx",
        nargs="?",
        const=True,
        type=Path,
        help="Also save an Excel report (optionally to the given path)",
    )
    args = parser.parse_args()

    try:
        main(args.tasks_file, args.date, args.xlsx)
    except (OSError, ValueError) as e:
        print(f"\nError: {e}")
        sys.exit(1)
