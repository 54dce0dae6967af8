import pytest

import schedule_parser as sp
from models import Lesson, WeekDay


def test_list_groups(schedule_workbook):
    assert sp.list_groups(schedule_workbook) == ["ГР-1", "ГР-2"]


def test_parse_schedule_xlsx_for_group(schedule_workbook):
    schedule = sp.parse_schedule_xlsx(schedule_workbook, "гр-1")

    assert schedule.group_name == "ГР-1"
    assert [day.day for day in schedule.day_schedules] == [WeekDay.monday, WeekDay.tuesday]
    monday = schedule.get_day(WeekDay.monday)
    assert monday.lessons == [
        Lesson(1, "Информатика", "Лекция", "Иванов И.И.", "Ауд. 101"),
        Lesson(2, "Физика", "Практика"),
    ]
    assert schedule.get_day(WeekDay.tuesday).lessons == [Lesson(2, "Математика")]


def test_parse_schedule_xlsx_second_group(schedule_workbook):
    schedule = sp.parse_schedule_xlsx(schedule_workbook, "ГР-2")

    assert schedule.get_day(WeekDay.monday).lessons == [Lesson(2, "История")]
    assert schedule.get_day(WeekDay.tuesday).lessons == [Lesson(1, "Химия")]
    assert schedule.lesson_count() == 2


def test_group_is_required_for_several_groups(schedule_workbook):
    with pytest.raises(sp.ScheduleParseError):
        sp.parse_schedule_xlsx(schedule_workbook)


def test_unknown_group(schedule_workbook):
    with pytest.raises(sp.ScheduleParseError, match="not found"):
        sp.parse_schedule_xlsx(schedule_workbook, "ГР-9")


def test_parse_schedule_file_reads_written_json(schedule_workbook, tmp_path):
    schedule = sp.parse_schedule_xlsx(schedule_workbook, "ГР-1")
    path = tmp_path / "gr-1.json"
    path.write_text(schedule.to_json(), encoding="utf-8")

    assert sp.parse_schedule_file(path) == schedule
    assert sp.parse_schedule_file(path, "гр-1") == schedule
    with pytest.raises(sp.ScheduleParseError):
        sp.parse_schedule_file(path, "ГР-2")


def test_parse_schedule_file_rejects_unknown_suffix(tmp_path):
    path = tmp_path / "schedule.txt"
    path.write_text("Понедельник", encoding="utf-8")
    with pytest.raises(sp.ScheduleParseError, match="Unsupported"):
        sp.parse_schedule_file(path)


def test_malformed_json():
    with pytest.raises(sp.ScheduleParseError):
        sp.parse_schedule_json('{"group_name": "G", "day_schedules": [{"day": "someday"}]}')


def test_broken_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip")
    with pytest.raises(sp.ScheduleParseError):
        sp.parse_schedule_xlsx(path)


def test_parse_lesson_cell_ignores_blank_lines():
    lesson = sp.parse_lesson_cell(3, "  Философия \n\n Семинар ")
    assert lesson == Lesson(3, "Философия", "Семинар")


@pytest.mark.parametrize("text", ["[]", '"ГР-1"', "42", '{"day_schedules": [["monday"]]}'])
def test_json_of_wrong_shape(text):
    with pytest.raises(sp.ScheduleParseError, match="Malformed"):
        sp.parse_schedule_json(text)


def test_json_file_in_other_encoding(tmp_path):
    path = tmp_path / "schedule.json"
    path.write_bytes('{"group_name": "ГР-1", "day_schedules": []}'.encode("cp1251"))
    with pytest.raises(sp.ScheduleParseError, match="UTF-8"):
        sp.parse_schedule_file(path)
