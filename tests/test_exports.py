"""
Tests for the Excel weekly report export.
"""

from datetime import date
from io import BytesIO

from openpyxl import load_workbook

from services.exports import (
    build_weekly_workbook,
    create_weekly_excel_report,
    format_day_heading,
    weekly_report_to_bytes,
)
from services.reports import generate_weekly_report


def test_report_sheet_layout(sample_tasks):
    report = generate_weekly_report(sample_tasks, "2024-12-01")
    ws = build_weekly_workbook(report)["Weekly Report"]

    assert ws["A1"].value == "Weekly Schedule Report"
    assert ws["A2"].value == "Sunday, December 1, 2024 - Saturday, December 7, 2024"
    assert [ws.cell(row=4, column=c).value for c in range(1, 6)] == [
        "Total Events", "Completed", "Completion Rate", "Total Duration", "Busiest Day",
    ]
    assert [ws.cell(row=5, column=c).value for c in range(1, 6)] == [
        3, 2, "67%", "4h 30m", "Monday (1 event)",
    ]

    # Sunday is empty, Monday has one task
    assert ws["A7"].value == "Sunday, Dec 1"
    assert ws["A8"].value == "No events"
    assert ws["A10"].value == "Monday, Dec 2 - 1 event - 1h"
    assert ws["A11"].value == "Time"
    assert [ws.cell(row=12, column=c).value for c in range(1, 6)] == [
        "9:00 AM - 10:00 AM", "Monday Meeting", "Team standup", "Done", "1h",
    ]


def test_insights_sheet(sample_tasks):
    report = generate_weekly_report(sample_tasks, "2024-12-01")
    ws = build_weekly_workbook(report)["Insights"]

    assert [ws.cell(row=r, column=1).value for r in range(3, 7)] == [
        "Most Active Day", "Average Daily Events", "Average Daily Duration", "Days with Events",
    ]
    assert [ws.cell(row=r, column=2).value for r in range(3, 7)] == [
        "Monday with 1 event", 0.4, "39m", "3 out of 7",
    ]


def test_empty_week_export():
    report = generate_weekly_report([], "2024-12-01")
    wb = build_weekly_workbook(report)

    assert wb["Weekly Report"]["E5"].value in (None, "")
    assert wb["Insights"]["B3"].value == "No events scheduled"


def test_day_heading_pluralizes():
    day = {
        "day_name": "Friday",
        "date": date(2024, 12, 6),
        "tasks": [],
        "total_duration": 0,
        "task_count": 2,
    }
    assert format_day_heading(day) == "Friday, Dec 6 - 2 events"


def test_workbook_bytes_round_trip(sample_tasks):
    report = generate_weekly_report(sample_tasks, "2024-12-01")
    wb = load_workbook(BytesIO(weekly_report_to_bytes(report)))

    assert wb.sheetnames == ["Weekly Report", "Insights"]


def test_create_weekly_excel_report_writes_file(tmp_path, sample_tasks):
    report = generate_weekly_report(sample_tasks, "2024-12-01")
    output_path = tmp_path / "reports" / "weekly.xlsx"

    create_weekly_excel_report(report, output_path)

    assert output_path.exists()
