"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("TASKS_DB_PATH", PROJECT_ROOT / "data" / "db" / "tasks.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# TASK RECORD CONFIGURATION
# =============================================================================

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DEFAULT_TIME = "00:00"  # all-day events and tasks without a start time

# Sunday-first, matching the report week
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DAYS_IN_WEEK = 7

# =============================================================================
# CALENDAR (ICS) CONFIGURATION
# =============================================================================

CALENDAR_MARKER = "VCALENDAR"
EVENT_MARKER = "VEVENT"

PROP_START = "DTSTART"
PROP_END = "DTEND"
PROP_SUMMARY = "SUMMARY"
PROP_DESCRIPTION = "DESCRIPTION"

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

REPORT_TITLE = "Weekly Schedule Report"
SUMMARY_LABELS = [
    "Total Events",
    "Completed",
    "Completion Rate",
    "Total Duration",
    "Busiest Day",
]
TASK_HEADERS = ["Time", "Event", "Description", "Status", "Duration"]
INSIGHT_LABELS = [
    "Most Active Day",
    "Average Daily Events",
    "Average Daily Duration",
    "Days with Events",
]

# =============================================================================
# API CONFIGURATION
# =============================================================================

TASKS_API_KEY = os.environ.get("TASKS_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_UPLOAD_SIZE_MB = int(os.environ.get("MAX_UPLOAD_SIZE_MB", "5"))
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024
API_VERSION = "1.0.0"
