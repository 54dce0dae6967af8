from __future__ import annotations

import re
from typing import Iterable, Optional

from slugify import slugify

from models import DaySchedule, Lesson


def slugify_group_name(group: Optional[str]) -> str:
    """Transliterate and slugify group names to filesystem-safe representation."""

    cleaned = (group or "").strip()
    slug = slugify(cleaned, lowercase=True, separator="-")
    slug = re.sub(r"-+", "-", slug)
    return slug or "schedule"


def format_lesson(lesson: Lesson) -> str:
    if lesson.is_cancelled:
        return f"{lesson.number}. —"
    details = " • ".join(
        part for part in (lesson.lesson_type, lesson.teacher, lesson.room) if part
    )
    text = f"{lesson.number}. {lesson.title}"
    return f"{text} ({details})" if details else text


def format_lessons_text(title: str, lessons: Iterable[Lesson]) -> str:
    """Format lessons for the console, one line per lesson."""

    lines = [title]
    lines.extend(f"  {format_lesson(lesson)}" for lesson in lessons)
    return "\n".join(lines)


def format_day_text(day_schedule: DaySchedule) -> str:
    return format_lessons_text(day_schedule.day.display_name, day_schedule.lessons)


__all__ = ["slugify_group_name", "format_lesson", "format_lessons_text", "format_day_text"]
