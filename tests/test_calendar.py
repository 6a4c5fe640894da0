"""
Tests for .ics parsing into task records.
"""

from datetime import date

import pytest

from fixtures.generate_tasks import generate_tasks, tasks_to_ics
from services.calendar import (
    CalendarFormatError,
    parse_calendar_file,
    parse_instant,
    parse_property_line,
    split_event_blocks,
    unfold_lines,
)


def calendar(*event_lines: str) -> str:
    """Wrap lines in a VCALENDAR container."""
    return "\n".join(["BEGIN:VCALENDAR", "VERSION:2.0", *event_lines, "END:VCALENDAR"])


def test_parses_basic_file(basic_ics):
    tasks = parse_calendar_file(basic_ics, id_factory=lambda: "mock-uuid-123")

    assert tasks == [
        {
            "id": "mock-uuid-123",
            "event": "Test Meeting",
            "description": "This is a test meeting",
            "date": "2024-12-01",
            "start_time": "10:00",
            "end_date": "2024-12-01",
            "end_time": "11:00",
            "completed": False,
        }
    ]


def test_utc_suffix_is_ignored():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000Z",
        "DTEND:20241201T113045Z",
        "SUMMARY:UTC Event",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["event"] == "UTC Event"
    assert task["date"] == "2024-12-01"
    assert task["start_time"] == "10:00"
    assert task["end_time"] == "11:30"  # seconds dropped


def test_all_day_event_uses_midnight():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART;VALUE=DATE:20241201",
        "DTEND;VALUE=DATE:20241202",
        "SUMMARY:All Day Event",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["date"] == "2024-12-01"
    assert task["end_date"] == "2024-12-02"
    assert task["start_time"] == "00:00"
    assert task["end_time"] == "00:00"


def test_multiple_events_keep_source_order(id_factory):
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241202T140000",
        "DTEND:20241202T150000",
        "SUMMARY:First Event",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:Second Event",
        "END:VEVENT",
    )
    tasks = parse_calendar_file(text, id_factory=id_factory)

    assert [t["event"] for t in tasks] == ["First Event", "Second Event"]
    assert [t["id"] for t in tasks] == ["task-1", "task-2"]


def test_default_ids_are_unique():
    event = ["BEGIN:VEVENT", "DTSTART:20241201T100000", "DTEND:20241201T110000", "END:VEVENT"]
    tasks = parse_calendar_file(calendar(*event, *event))

    assert len({t["id"] for t in tasks}) == 2


def test_folded_lines_concatenate_exactly():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:This is a very long event title that spans",
        "  multiple lines due to line folding",
        "DESCRIPTION:This description al",
        "\tso spans lines",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    # Only the single fold character is removed
    assert task["event"] == "This is a very long event title that spans multiple lines due to line folding"
    assert task["description"] == "This description also spans lines"


def test_fold_inside_property_name():
    text = calendar(
        "BEGIN:VEVENT",
        "DTST",
        " ART:20241201T100000",
        "DTEND:2024120",
        " 1T110000",
        "SUMM",
        " ARY:Split",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["start_time"] == "10:00"
    assert task["end_date"] == "2024-12-01"
    assert task["event"] == "Split"


def test_fold_inside_escape_sequence():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:Lunch\\",
        " , then coffee",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["event"] == "Lunch, then coffee"


def test_escaped_characters():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:Event with\\, comma and\\; semicolon",
        "DESCRIPTION:Description with\\nnew line",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["event"] == "Event with, comma and; semicolon"
    assert task["description"] == "Description with\nnew line"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (r"a\,b", "a,b"),
        (r"a\;b", "a;b"),
        (r"a\\b", "a\\b"),
        (r"a\nb", "a\nb"),
        (r"a\Nb", "a\nb"),
        (r"x\,y\;z\\w\nv", "x,y;z\\w\nv"),
        (r"path\\next", "path\\next"),  # escaped backslash followed by 'n'
        (r"odd\x", r"odd\x"),
        ("plain text: 100%", "plain text: 100%"),
    ],
)
def test_property_values_are_unescaped(raw, expected):
    assert parse_property_line(f"SUMMARY:{raw}") == ("SUMMARY", {}, expected)


def test_skips_incomplete_events():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "SUMMARY:Event without end time",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "DTEND:20241201T100000",
        "SUMMARY:Event without start time",
        "END:VEVENT",
        "BEGIN:VEVENT",
        "DTSTART:20241202T100000",
        "DTEND:20241202T110000",
        "SUMMARY:Complete Event",
        "END:VEVENT",
    )
    tasks = parse_calendar_file(text)

    assert [t["event"] for t in tasks] == ["Complete Event"]


def test_unrecognized_instant_counts_as_missing():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:tomorrow morning",
        "DTEND:20241202T110000",
        "END:VEVENT",
    )
    assert parse_calendar_file(text) == []


def test_empty_calendar_returns_empty_list():
    assert parse_calendar_file("BEGIN:VCALENDAR\nVERSION:2.0\nEND:VCALENDAR") == []


def test_invalid_content_raises_format_error():
    with pytest.raises(CalendarFormatError):
        parse_calendar_file("This is not a valid ICS file")


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_calendar_file("")


def test_event_block_without_container_is_accepted():
    text = "BEGIN:VEVENT\nDTSTART:20241201T100000\nDTEND:20241201T110000\nEND:VEVENT"
    assert len(parse_calendar_file(text)) == 1


def test_crlf_and_lowercase_markers():
    text = "begin:vcalendar\r\nbegin:vevent\r\ndtstart:20241201T100000\r\ndtend:20241201T110000\r\nsummary:Lower\r\nend:vevent\r\nend:vcalendar\r\n"
    [task] = parse_calendar_file(text)

    assert task["event"] == "Lower"


def test_missing_summary_and_description_default_to_empty():
    text = calendar("BEGIN:VEVENT", "DTSTART:20241201T100000", "DTEND:20241201T110000", "END:VEVENT")
    [task] = parse_calendar_file(text)

    assert task["event"] == ""
    assert task["description"] == ""


def test_parameters_are_ignored_for_timed_values():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART;TZID=Europe/Lisbon:20241201T100000",
        'DTEND;TZID="America/New_York":20241201T110000',
        "SUMMARY;LANGUAGE=en:Zoned",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert (task["start_time"], task["end_time"], task["event"]) == ("10:00", "11:00", "Zoned")


def test_alarm_properties_do_not_leak_into_event():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:Dentist",
        "DESCRIPTION:Bring insurance card",
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "DESCRIPTION:Reminder",
        "END:VALARM",
        "END:VEVENT",
    )
    [task] = parse_calendar_file(text)

    assert task["description"] == "Bring insurance card"


def test_unfold_lines_keeps_unfolded_lines():
    assert unfold_lines("A:1\r\n B\nC:2\rD:3") == ["A:1B", "C:2", "D:3"]


def test_split_event_blocks_drops_unterminated_block():
    lines = ["BEGIN:VEVENT", "SUMMARY:One", "END:VEVENT", "BEGIN:VEVENT", "SUMMARY:Two"]
    assert split_event_blocks(lines) == [["SUMMARY:One"]]


def test_parse_property_line_handles_quoted_colon():
    name, params, value = parse_property_line('DTSTART;TZID="Custom: Zone":20241201T100000')

    assert name == "DTSTART"
    assert params == {"TZID": "Custom: Zone"}
    assert value == "20241201T100000"


def test_parse_property_line_value_may_contain_colons():
    assert parse_property_line("SUMMARY:Call at 10:30") == ("SUMMARY", {}, "Call at 10:30")
    assert parse_property_line("no separator here") is None


def test_parse_instant():
    assert parse_instant("20241201T235959") == ("2024-12-01", "23:59")
    assert parse_instant("20241201", {"VALUE": "DATE"}) == ("2024-12-01", "00:00")
    assert parse_instant("20241201") == ("2024-12-01", "00:00")
    assert parse_instant("2024-12-01T10:00:00") is None


def test_generated_calendar_parses_back(id_factory):
    tasks = generate_tasks(date(2024, 12, 1), count=15, seed=7)
    parsed = parse_calendar_file(tasks_to_ics(tasks), id_factory=id_factory)

    assert len(parsed) == len(tasks)
    for original, task in zip(tasks, parsed):
        for key in ("event", "description", "date", "start_time", "end_date", "end_time"):
            assert task[key] == original[key]
        assert task["completed"] is False


def test_unterminated_event_does_not_swallow_the_next_one():
    text = calendar(
        "BEGIN:VEVENT",
        "DTSTART:20241201T100000",
        "DTEND:20241201T110000",
        "SUMMARY:Broken",
        "BEGIN:VEVENT",
        "DTSTART:20241202T100000",
        "DTEND:20241202T110000",
        "SUMMARY:Complete",
        "END:VEVENT",
    )
    assert [t["event"] for t in parse_calendar_file(text)] == ["Complete"]


def test_split_event_blocks_restarts_on_new_event():
    lines = [
        "BEGIN:VEVENT", "SUMMARY:One",
        "BEGIN:VALARM", "ACTION:DISPLAY",
        "BEGIN:VEVENT", "SUMMARY:Two", "END:VEVENT",
    ]
    assert split_event_blocks(lines) == [["SUMMARY:Two"]]


def test_parse_property_line_normalizes_names():
    name, params, value = parse_property_line("dtstart;value=date:20241201")

    assert name == "DTSTART"
    assert params == {"VALUE": "date"}
    assert parse_instant(value, params) == ("2024-12-01", "00:00")


def test_parse_property_line_joins_multi_valued_parameters():
    assert parse_property_line("SUMMARY;X-TAGS=a,b:Tagged") == ("SUMMARY", {"X-TAGS": "a,b"}, "Tagged")
