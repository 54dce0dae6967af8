import sys
from pathlib import Path

import pytest

# Делает корень репозитория доступным для импортов модулей console/controller
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import openpyxl  # noqa: E402

from config import Settings  # noqa: E402

CHANGES_HTML = """
<html>
<body>
<h3>Изменения в расписании на 02.09.2024</h3>
<table>
    <tr><th>Группа</th><th>Пара</th><th>Дисциплина</th><th>Преподаватель</th><th>Аудитория</th></tr>
    <tr><td>ГР-1</td><td>2</td><td>Химия</td><td>Петров П.П.</td><td>204</td></tr>
    <tr><td></td><td>1</td><td>нет</td><td></td><td></td></tr>
    <tr><td>ГР-2</td><td>все</td><td></td><td></td><td></td></tr>
    <tr><td></td><td>3</td><td>Философия</td><td>Сидоров С.С.</td><td>310</td></tr>
</table>
</body>
</html>
"""


class RecordingController:
    """Controller stand-in that records every call."""

    def __init__(self):
        self.calls = []

    def parse_schedule(self, args):
        self.calls.append(("parse_schedule", list(args)))

    def parse_changes(self, args):
        self.calls.append(("parse_changes", list(args)))

    def show_help(self):
        self.calls.append(("show_help", None))

    def initialize_basic_parsing_process_by_arguments(self, args):
        self.calls.append(("parse", list(args)))

    def write_last_result(self):
        self.calls.append(("write_last_result", None))

    def show_last_result(self):
        self.calls.append(("show_last_result", None))

    def exit(self):
        self.calls.append(("exit", None))


@pytest.fixture
def recording_controller():
    return RecordingController()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        admin_user="tester",
        locale="en",
        default_group=None,
        output_dir=tmp_path / "output",
        timezone="Europe/Moscow",
        log_level="DEBUG",
    )


@pytest.fixture
def schedule_workbook(tmp_path):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["День", "Пара", "ГР-1", "ГР-2"])
    sheet.append(["Понедельник", 1, "Информатика\nЛекция\nИванов И.И.\nАуд. 101", None])
    sheet.append([None, 2, "Физика\nПрактика", "История"])
    sheet.append(["Вторник", 1, None, "Химия"])
    sheet.append([None, 2, "Математика", None])
    sheet.merge_cells("A2:A3")
    path = tmp_path / "schedule.xlsx"
    workbook.save(path)
    return path


@pytest.fixture
def changes_document(tmp_path):
    path = tmp_path / "changes.html"
    path.write_text(CHANGES_HTML, encoding="utf-8")
    return path
