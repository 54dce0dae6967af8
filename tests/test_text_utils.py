from models import DaySchedule, Lesson, WeekDay
from text_utils import format_day_text, format_lesson, slugify_group_name


def test_slugify_group_name_transliterates_and_cleans():
    assert slugify_group_name("15.14д-гг01/24м") == "15-14d-gg01-24m"
    assert slugify_group_name("  группа А-1  ") == "gruppa-a-1"
    assert slugify_group_name(None) == "schedule"


def test_format_lesson():
    assert format_lesson(Lesson(1, "Физика", "Лекция", None, "101")) == "1. Физика (Лекция • 101)"
    assert format_lesson(Lesson(2, "Химия")) == "2. Химия"
    assert format_lesson(Lesson(3, None)) == "3. —"


def test_format_day_text():
    day = DaySchedule(WeekDay.thursday, [Lesson(1, "Физика"), Lesson(2, "Химия")])
    assert format_day_text(day) == "Thursday\n  1. Физика\n  2. Химия"
