"""
Calendar (.ics) parsing into task records.

Only the subset needed for one-off events is understood: DTSTART, DTEND,
SUMMARY and DESCRIPTION inside VEVENT blocks. Everything outside event
blocks is ignored apart from the check that the text is a calendar at all.
"""

import re
import uuid
from collections.abc import Callable

from icalendar.parser import Contentline

from core.config import (
    CALENDAR_MARKER,
    DEFAULT_TIME,
    EVENT_MARKER,
    PROP_DESCRIPTION,
    PROP_END,
    PROP_START,
    PROP_SUMMARY,
)
from models.tasks import Task

# 20241201T100000 or 20241201T100000Z (the UTC marker is accepted and ignored)
DATETIME_PATTERN = re.compile(r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})Z?$")
DATE_PATTERN = re.compile(r"^(\d{4})(\d{2})(\d{2})$")

LINE_BREAK_PATTERN = re.compile(r"\r\n|\n|\r")


class CalendarFormatError(ValueError):
    """Raised when the input contains no calendar or event markers at all."""


def new_task_id() -> str:
    """Default id generator for parsed tasks."""
    return str(uuid.uuid4())


# =============================================================================
# LEXICAL HELPERS
# =============================================================================


def unfold_lines(text: str) -> list[str]:
    """
    Join folded continuation lines into logical lines.

    A physical line starting with a space or tab continues the previous
    logical line. Exactly one leading whitespace character is removed, so
    a fold in the middle of a word or a property name reassembles exactly.
    """
    lines: list[str] = []
    for raw_line in LINE_BREAK_PATTERN.split(text.lstrip("\ufeff")):
        if raw_line[:1] in (" ", "\t") and lines:
            lines[-1] += raw_line[1:]
        else:
            lines.append(raw_line)
    return lines


def parse_property_line(line: str) -> tuple[str, dict[str, str], str] | None:
    """
    Split 'NAME;PARAM=VALUE:value' into (NAME, {PARAM: VALUE}, value).

    Splitting and backslash unescaping of the value are done by
    icalendar's Contentline. Returns None for lines that are not valid
    content lines.
    """
    try:
        name, params, value = Contentline(line).parts()
    except ValueError:
        return None
    return name.upper(), {key: _param_text(param) for key, param in params.items()}, value


def _param_text(value: str | list[str]) -> str:
    # Comma-separated parameter values come back as a list
    return ",".join(value) if isinstance(value, list) else value


def parse_instant(value: str, params: dict[str, str] | None = None) -> tuple[str, str] | None:
    """
    Decompose an ICS date or date-time value into ('YYYY-MM-DD', 'HH:MM').

    Date-only values (VALUE=DATE) map to midnight. Seconds and the trailing
    UTC marker are dropped. Returns None when the value is not recognized.
    """
    value = value.strip()
    date_only = (params or {}).get("VALUE", "").upper() == "DATE"

    if not date_only:
        match = DATETIME_PATTERN.match(value)
        if match:
            year, month, day, hour, minute, _seconds = match.groups()
            return f"{year}-{month}-{day}", f"{hour}:{minute}"

    match = DATE_PATTERN.match(value)
    if match:
        year, month, day = match.groups()
        return f"{year}-{month}-{day}", DEFAULT_TIME
    return None


# =============================================================================
# BLOCK STRUCTURE
# =============================================================================


def _marker(line: str) -> tuple[str, str] | None:
    """Return ('BEGIN'|'END', COMPONENT) for component delimiter lines."""
    keyword, sep, component = line.strip().partition(":")
    keyword = keyword.upper()
    if sep and keyword in ("BEGIN", "END"):
        return keyword, component.strip().upper()
    return None


def has_calendar_markers(lines: list[str]) -> bool:
    """Check for at least one BEGIN:VCALENDAR or BEGIN:VEVENT line."""
    for line in lines:
        if _marker(line) in (("BEGIN", CALENDAR_MARKER), ("BEGIN", EVENT_MARKER)):
            return True
    return False


def split_event_blocks(lines: list[str]) -> list[list[str]]:
    """
    Collect the property lines of each VEVENT block, in source order.

    Nested components (e.g. VALARM) are skipped so their properties never
    leak into the event. A block left open when the next BEGIN:VEVENT
    arrives, or at end of input, is dropped.
    """
    blocks: list[list[str]] = []
    current: list[str] | None = None
    depth = 0

    for line in lines:
        marker = _marker(line)
        if marker == ("BEGIN", EVENT_MARKER):
            current = []
            depth = 0
            continue
        if current is None:
            continue

        if marker is not None and marker[0] == "BEGIN":
            depth += 1
        elif marker is not None and marker[0] == "END":
            if depth == 0:
                if marker[1] == EVENT_MARKER:
                    blocks.append(current)
                current = None
            else:
                depth -= 1
        elif depth == 0:
            current.append(line)

    return blocks


# =============================================================================
# EVENT -> TASK
# =============================================================================


def parse_event(lines: list[str], id_factory: Callable[[], str] = new_task_id) -> Task | None:
    """
    Convert one event block into a task record.

    Returns None unless both DTSTART and DTEND resolve.
    """
    start = None
    end = None
    summary = ""
    description = ""

    for line in lines:
        parsed = parse_property_line(line)
        if parsed is None:
            continue
        name, params, value = parsed

        if name == PROP_START:
            start = parse_instant(value, params)
        elif name == PROP_END:
            end = parse_instant(value, params)
        elif name == PROP_SUMMARY:
            summary = value
        elif name == PROP_DESCRIPTION:
            description = value

    if start is None or end is None:
        return None

    return {
        "id": id_factory(),
        "event": summary,
        "description": description,
        "date": start[0],
        "start_time": start[1],
        "end_date": end[0],
        "end_time": end[1],
        "completed": False,
    }


def parse_calendar_file(text: str, id_factory: Callable[[], str] = new_task_id) -> list[Task]:
    """
    Parse calendar file text into task records.

    Args:
        text: Full .ics file content
        id_factory: Called once per retained event to assign its id

    Returns:
        Task records for every complete event, in source order

    Raises:
        CalendarFormatError: if the text has no calendar or event markers
    """
    lines = unfold_lines(text)
    if not has_calendar_markers(lines):
        raise CalendarFormatError("Not a calendar file: no BEGIN:VCALENDAR or BEGIN:VEVENT found")

    tasks = []
    for block in split_event_blocks(lines):
        task = parse_event(block, id_factory)
        if task is not None:
            tasks.append(task)
    return tasks
