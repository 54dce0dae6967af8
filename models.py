from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, List, Optional


class WeekDay(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_date(cls, value: date) -> "WeekDay":
        return list(cls)[value.weekday()]

    @classmethod
    def from_text(cls, text: str) -> Optional["WeekDay"]:
        """Resolve an English or Russian day name, ignoring case and trailing text."""

        cleaned = text.strip().lower()
        for day, names in _DAY_NAMES.items():
            if any(cleaned.startswith(name) for name in names):
                return day
        return None


_DAY_NAMES = {
    WeekDay.monday: ("monday", "понедельник"),
    WeekDay.tuesday: ("tuesday", "вторник"),
    WeekDay.wednesday: ("wednesday", "среда"),
    WeekDay.thursday: ("thursday", "четверг"),
    WeekDay.friday: ("friday", "пятница"),
    WeekDay.saturday: ("saturday", "суббота"),
    WeekDay.sunday: ("sunday", "воскресенье"),
}


@dataclass
class Lesson:
    """Single lesson occurrence. A lesson without a title stands for "no lesson"."""

    number: int
    title: Optional[str]
    lesson_type: Optional[str] = None
    teacher: Optional[str] = None
    room: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self.title is None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Lesson":
        return cls(
            number=int(data["number"]),
            title=data.get("title"),
            lesson_type=data.get("lesson_type"),
            teacher=data.get("teacher"),
            room=data.get("room"),
        )


@dataclass
class Changes:
    """Overrides for one day of a schedule.

    With ``absolute`` set the lessons replace the whole day, otherwise they are
    laid over the existing lessons by pair number: all lessons of a
    pair listed in the changes are replaced, a cancelled entry empties the pair.
    """

    changes: List[Lesson] = field(default_factory=list)
    absolute: bool = False
    day: Optional[WeekDay] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day.value if self.day else None,
            "absolute": self.absolute,
            "changes": [asdict(lesson) for lesson in self.changes],
        }

    def to_json(self) -> str:
        return _dump(self.to_dict())

    def __str__(self) -> str:
        return self.to_json()


@dataclass
class DaySchedule:
    day: WeekDay
    lessons: List[Lesson] = field(default_factory=list)

    def apply(self, changes: Changes) -> "DaySchedule":
        """Return a new day with ``changes`` applied."""

        if changes.absolute:
            lessons = [lesson for lesson in changes.changes if not lesson.is_cancelled]
            return DaySchedule(day=self.day, lessons=lessons)

        # a pair may hold several lessons (subgroups), changes replace the whole pair
        by_number: dict[int, List[Lesson]] = {}
        for lesson in self.lessons:
            by_number.setdefault(lesson.number, []).append(lesson)
        replaced: dict[int, List[Lesson]] = {}
        for lesson in changes.changes:
            pair = replaced.setdefault(lesson.number, [])
            if not lesson.is_cancelled:
                pair.append(lesson)
        by_number.update(replaced)
        lessons = [lesson for key in sorted(by_number) for lesson in by_number[key]]
        return DaySchedule(day=self.day, lessons=lessons)

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day.value, "lessons": [asdict(lesson) for lesson in self.lessons]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DaySchedule":
        return cls(
            day=WeekDay(data["day"]),
            lessons=[Lesson.from_dict(item) for item in data.get("lessons", [])],
        )


@dataclass
class WeekSchedule:
    """Whole week of lessons for one group."""

    group_name: Optional[str]
    day_schedules: List[DaySchedule] = field(default_factory=list)

    def get_day(self, day: WeekDay) -> Optional[DaySchedule]:
        for day_schedule in self.day_schedules:
            if day_schedule.day == day:
                return day_schedule
        return None

    def add_day(self, day_schedule: DaySchedule) -> DaySchedule:
        if self.get_day(day_schedule.day) is not None:
            raise ValueError(f"Schedule already contains {day_schedule.day.value}")
        self.day_schedules.append(day_schedule)
        return day_schedule

    def lesson_count(self) -> int:
        return sum(len(day.lessons) for day in self.day_schedules)

    def to_dict(self) -> dict[str, Any]:
        return {
            "group_name": self.group_name,
            "day_schedules": [day.to_dict() for day in self.day_schedules],
        }

    def to_json(self) -> str:
        return _dump(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeekSchedule":
        if not isinstance(data, dict):
            raise TypeError(f"Schedule must be a JSON object, got {type(data).__name__}")
        schedule = cls(group_name=data.get("group_name"))
        for item in data.get("day_schedules", []):
            schedule.add_day(DaySchedule.from_dict(item))
        return schedule

    @classmethod
    def from_json(cls, text: str) -> "WeekSchedule":
        return cls.from_dict(json.loads(text))

    def __str__(self) -> str:
        return self.to_json()


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, indent=4)


__all__ = ["WeekDay", "Lesson", "Changes", "DaySchedule", "WeekSchedule"]
