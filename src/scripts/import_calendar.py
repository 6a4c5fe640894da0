#!/usr/bin/env python3
"""
Import events from an iCalendar (.ics) file as task records.

Writes the tasks as a JSON array (camelCase fields, as the web app stores
them) and reports any tasks that would fail form validation.

Usage:
    uv run python src/scripts/import_calendar.py calendar.ics --output tasks.json
"""

import argparse
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.validation import validate_tasks
from models.tasks import task_to_wire
from services.calendar import CalendarFormatError, parse_calendar_file


def import_calendar(input_path: Path, output_path: Path | None = None) -> list[dict]:
    """Parse input_path and write (or print) the resulting tasks."""
    text = input_path.read_text(encoding="utf-8-sig")
    tasks = parse_calendar_file(text)
    print(f"Parsed {len(tasks)} event(s) from {input_path.name}", file=sys.stderr)

    problems = validate_tasks(tasks)
    if problems:
        print(f"Tasks with problems: {len(problems)}", file=sys.stderr)
        for task_id, errors in problems.items():
            print(f"  {task_id}: {'; '.join(errors)}", file=sys.stderr)

    payload = json.dumps([task_to_wire(task) for task in tasks], indent=2)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Saved tasks to: {output_path}", file=sys.stderr)
    else:
        print(payload)

    return tasks


def main():
    parser = argparse.ArgumentParser(description="Import .ics events as tasks")
    parser.add_argument("input_file", type=Path, help="Path to the .ics file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Write tasks JSON here instead of stdout",
    )
    args = parser.parse_args()

    try:
        import_calendar(args.input_file, args.output)
    except (CalendarFormatError, OSError, UnicodeDecodeError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
