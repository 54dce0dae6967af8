"""
Разбор подготовленного файла с недельным расписанием групп.

Ожидаемый формат .xlsx (первый лист):

    | День        | Пара | 15.14д-гг01/24м     | 15.14д-гг02/24м | ...
    | Понедельник | 1    | Информатика         |                 |
    |             |      | Лекция              |                 |
    |             |      | Иванов И.И.         |                 |
    |             |      | Ауд. 101            |                 |
    |             | 2    | ...                 | ...             |

Каждая ячейка занятия содержит до четырёх строк: название, тип, преподаватель,
аудитория. Пустая (или объединённая) ячейка дня означает тот же день, что и
строкой выше. Также поддерживается .json, записанный командой `write`.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

import openpyxl
from openpyxl.worksheet.worksheet import Worksheet

from models import DaySchedule, Lesson, WeekDay, WeekSchedule

LOGGER = logging.getLogger(__name__)

HEADER_ROW = 1
DAY_COLUMN = 1
NUMBER_COLUMN = 2
FIRST_GROUP_COLUMN = 3

SCHEDULE_SUFFIXES = (".xlsx", ".json")

Source = Union[str, Path, BinaryIO]


class ScheduleParseError(ValueError):
    """Source document can't be turned into a schedule."""


def parse_schedule_file(path: Union[str, Path], group: Optional[str] = None) -> WeekSchedule:
    """Parse a prepared schedule file, choosing the format by suffix."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return parse_schedule_xlsx(path, group)
    if suffix == ".json":
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ScheduleParseError(f"Schedule JSON is not UTF-8: {exc}") from exc
        schedule = parse_schedule_json(text)
        if group and schedule.group_name and schedule.group_name.lower() != group.lower():
            raise ScheduleParseError(
                f"File contains schedule for {schedule.group_name}, not for {group}"
            )
        return schedule
    raise ScheduleParseError(f"Unsupported schedule file type: {path.suffix or path.name}")


def parse_schedule_json(text: str) -> WeekSchedule:
    try:
        return WeekSchedule.from_json(text)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ScheduleParseError(f"Malformed schedule JSON: {exc}") from exc


def list_groups(source: Source) -> List[str]:
    """Return group names from the header row of the workbook."""

    return list(_group_columns(_load_sheet(source)))


def parse_schedule_xlsx(source: Source, group: Optional[str] = None) -> WeekSchedule:
    """Parse the week schedule of ``group`` from a prepared workbook."""

    sheet = _load_sheet(source)
    groups = _group_columns(sheet)
    if not groups:
        raise ScheduleParseError("No group columns found in the header row")
    column = _resolve_group_column(groups, group)
    group_name = next(name for name, col in groups.items() if col == column)

    schedule = WeekSchedule(group_name=group_name)
    current: Optional[DaySchedule] = None
    for row in range(HEADER_ROW + 1, sheet.max_row + 1):
        day_value = sheet.cell(row, DAY_COLUMN).value
        if day_value:
            day = WeekDay.from_text(str(day_value))
            if day is None:
                raise ScheduleParseError(f"Unknown day {day_value!r} in row {row}")
            current = schedule.get_day(day) or schedule.add_day(DaySchedule(day=day))

        if current is None:
            LOGGER.debug("Skipping row %s before the first day", row)
            continue

        lesson_value = sheet.cell(row, column).value
        if lesson_value is None or not str(lesson_value).strip():
            continue
        number = _parse_number(sheet.cell(row, NUMBER_COLUMN).value, row)
        current.lessons.append(parse_lesson_cell(number, str(lesson_value)))

    LOGGER.info(
        "Parsed %s lessons over %s days for %s",
        schedule.lesson_count(),
        len(schedule.day_schedules),
        group_name,
    )
    return schedule


def parse_lesson_cell(number: int, text: str) -> Lesson:
    """Build a lesson from a multi-line cell: title, type, teacher, room."""

    lines: List[Optional[str]] = [line.strip() for line in text.splitlines() if line.strip()]
    lines += [None] * (4 - len(lines))
    title, lesson_type, teacher, room = lines[:4]
    return Lesson(number=number, title=title, lesson_type=lesson_type, teacher=teacher, room=room)


def _load_sheet(source: Source) -> Worksheet:
    try:
        workbook = openpyxl.load_workbook(source, read_only=False, data_only=True)
    except FileNotFoundError:
        raise
    except Exception as exc:
        raise ScheduleParseError(f"Can't read workbook: {exc}") from exc
    return workbook.worksheets[0]


def _group_columns(sheet: Worksheet) -> dict[str, int]:
    groups: dict[str, int] = {}
    for col in range(FIRST_GROUP_COLUMN, sheet.max_column + 1):
        value = sheet.cell(HEADER_ROW, col).value
        if value is None or not str(value).strip():
            continue
        groups[str(value).strip()] = col
    return groups


def _resolve_group_column(groups: dict[str, int], group: Optional[str]) -> int:
    if group is None:
        if len(groups) == 1:
            return next(iter(groups.values()))
        raise ScheduleParseError(
            "Workbook contains several groups, specify one of: " + ", ".join(groups)
        )
    for name, col in groups.items():
        if name.lower() == group.strip().lower():
            return col
    raise ScheduleParseError(f"Group {group} not found, available: " + ", ".join(groups))


def _parse_number(value: object, row: int) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ScheduleParseError(f"Row {row} has no valid pair number: {value!r}") from None


__all__ = [
    "ScheduleParseError",
    "SCHEDULE_SUFFIXES",
    "parse_schedule_file",
    "parse_schedule_json",
    "parse_schedule_xlsx",
    "parse_lesson_cell",
    "list_groups",
]
