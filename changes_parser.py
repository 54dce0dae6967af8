"""
Разбор скачанного документа с заменами (HTML-страница с таблицей).

    <h3>Изменения в расписании на 02.09.2024</h3>
    <table>
        <tr><th>Группа</th><th>Пара</th><th>Дисциплина</th><th>Преподаватель</th><th>Аудитория</th></tr>
        <tr><td>15.14д-гг01/24м</td><td>2</td><td>Физика</td><td>Петров П.П.</td><td>204</td></tr>
        <tr><td></td><td>3</td><td>нет</td><td></td><td></td></tr>
    </table>

Пустая ячейка группы относится к группе строкой выше. Вместо номера пары
может стоять «все»: тогда замены полностью заменяют день.
"""
from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup, UnicodeDammit

from models import Changes, Lesson, WeekDay
from schedule_parser import ScheduleParseError

LOGGER = logging.getLogger(__name__)

CHANGES_SUFFIXES = (".html", ".htm")
# Tried after a declared charset; saved college documents are often cp1251
FALLBACK_ENCODINGS = ["utf-8", "windows-1251"]
ABSOLUTE_MARKERS = {"все", "all", "весь день"}
CANCEL_MARKERS = {"нет", "отмена", "-", "—"}
HEADER_TAGS = ["h1", "h2", "h3", "h4", "h5"]


def parse_changes_file(path: Union[str, Path], group: str) -> Changes:
    path = Path(path)
    if path.suffix.lower() not in CHANGES_SUFFIXES:
        raise ScheduleParseError(f"Unsupported changes file type: {path.suffix or path.name}")
    return parse_changes_html(decode_document(path.read_bytes()), group)


def decode_document(data: bytes) -> str:
    """Decode a saved HTML page, honouring its declared charset when present."""

    dammit = UnicodeDammit(data, user_encodings=FALLBACK_ENCODINGS, is_html=True)
    if dammit.unicode_markup is None:
        raise ScheduleParseError("Can't detect the encoding of the changes document")
    LOGGER.debug("Changes document decoded as %s", dammit.original_encoding)
    return dammit.unicode_markup


def parse_changes_html(html: str, group: str) -> Changes:
    """Collect changes for ``group`` from the document's changes table."""

    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        raise ScheduleParseError("Changes document contains no table")

    target = group.strip().lower()
    result = Changes(day=_parse_day(soup))
    groups_seen: set[str] = set()
    current_group: Optional[str] = None
    for row in table.find_all("tr"):
        cells = [cell.get_text(" ", strip=True) for cell in row.find_all(["td", "th"])]
        if len(cells) < 3 or row.find("th") is not None:
            continue
        if cells[0]:
            current_group = cells[0]
        if current_group is None:
            LOGGER.debug("Skipping row without group: %s", cells)
            continue
        groups_seen.add(current_group.lower())
        if current_group.lower() != target:
            continue

        number_text = cells[1].lower()
        if number_text in ABSOLUTE_MARKERS:
            result.absolute = True
            continue
        try:
            number = int(number_text)
        except ValueError:
            LOGGER.info("Skipping row with unknown pair number: %s", cells)
            continue
        result.changes.append(_build_lesson(number, cells))

    if target not in groups_seen:
        raise ScheduleParseError(f"No changes for group {group} in the document")
    return result


def parse_date_from_header(text: str) -> Optional[dt.date]:
    """Extract a dd.mm.yyyy date from a heading."""

    match = re.search(r"(\d{2}\.\d{2}\.\d{4})", text)
    if not match:
        return None
    try:
        return dt.datetime.strptime(match.group(1), "%d.%m.%Y").date()
    except ValueError:
        return None


def _parse_day(soup: BeautifulSoup) -> Optional[WeekDay]:
    for header in soup.find_all(HEADER_TAGS):
        date = parse_date_from_header(header.get_text(" ", strip=True))
        if date:
            return WeekDay.from_date(date)
    return None


def _build_lesson(number: int, cells: List[str]) -> Lesson:
    title = cells[2] or None
    if title and title.lower() in CANCEL_MARKERS:
        return Lesson(number=number, title=None)
    teacher = cells[3] if len(cells) > 3 and cells[3] else None
    room = cells[4] if len(cells) > 4 and cells[4] else None
    return Lesson(number=number, title=title, teacher=teacher, room=room)


__all__ = [
    "CHANGES_SUFFIXES",
    "parse_changes_file",
    "parse_changes_html",
    "decode_document",
    "parse_date_from_header",
]
