"""
Pytest configuration and shared fixtures.
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def id_factory():
    """Deterministic id generator: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def sample_task():
    """Sample task dictionary for testing."""
    return {
        "id": "1",
        "event": "Monday Meeting",
        "description": "Team standup",
        "date": "2024-12-02",  # Monday
        "start_time": "09:00",
        "end_date": "2024-12-02",
        "end_time": "10:00",
        "completed": True,
    }


@pytest.fixture
def sample_tasks(sample_task):
    """Monday, Wednesday and Friday tasks in the week of Sunday 2024-12-01."""
    return [
        sample_task,
        {
            "id": "2",
            "event": "Wednesday Workshop",
            "description": "Training session",
            "date": "2024-12-04",
            "start_time": "14:00",
            "end_date": "2024-12-04",
            "end_time": "16:00",
            "completed": False,
        },
        {
            "id": "3",
            "event": "Friday Review",
            "description": "Week review",
            "date": "2024-12-06",
            "start_time": "15:00",
            "end_date": "2024-12-06",
            "end_time": "16:30",
            "completed": True,
        },
    ]


@pytest.fixture
def basic_ics():
    """Calendar with a single timed event."""
    return "\r\n".join(
        [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "PRODID:-//Test//Test//EN",
            "BEGIN:VEVENT",
            "UID:test-event-1",
            "DTSTART:20241201T100000",
            "DTEND:20241201T110000",
            "SUMMARY:Test Meeting",
            "DESCRIPTION:This is a test meeting",
            "END:VEVENT",
            "END:VCALENDAR",
            "",
        ]
    )
