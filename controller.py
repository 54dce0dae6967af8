from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, TypeVar, Union

from changes_parser import CHANGES_SUFFIXES, parse_changes_file
from config import Settings
from locales import CommandDescriptions
from models import Changes, DaySchedule, WeekSchedule
from schedule_parser import SCHEDULE_SUFFIXES, ScheduleParseError, parse_schedule_file
from text_utils import format_day_text, slugify_group_name

LOGGER = logging.getLogger(__name__)

Result = Union[WeekSchedule, Changes]
T = TypeVar("T")

SCHEDULE_USAGE = "Usage: schedule <file.xlsx|file.json> [group]"
CHANGES_USAGE = "Usage: changes <file.html> [group]"
PARSE_USAGE = "Usage: parse [schedule|changes] <file> [group]"


class ConsoleController:
    """Performs the work behind the console commands and prints the outcome."""

    def __init__(
        self,
        settings: Settings,
        descriptions: CommandDescriptions,
        writer: Callable[[str], None] = print,
    ) -> None:
        self.settings = settings
        self.descriptions = descriptions
        self._echo = writer
        self.last_result: Optional[Result] = None
        self.last_group: Optional[str] = None
        self.schedule: Optional[WeekSchedule] = None

    def parse_schedule(self, args: Sequence[str]) -> None:
        path, group = self._resolve_args(args)
        if path is None:
            self._echo(SCHEDULE_USAGE)
            return
        schedule = self._parse(parse_schedule_file, path, group)
        if schedule is None:
            return

        self.schedule = schedule
        self._remember(schedule, schedule.group_name)
        self._echo(
            f"Schedule for {schedule.group_name}: {len(schedule.day_schedules)} days, "
            f"{schedule.lesson_count()} lessons."
        )

    def parse_changes(self, args: Sequence[str]) -> None:
        path, group = self._resolve_args(args)
        if path is None or group is None:
            self._echo(CHANGES_USAGE)
            return
        changes = self._parse(parse_changes_file, path, group)
        if changes is None:
            return

        self._remember(changes, group)
        kind = "absolute" if changes.absolute else "partial"
        day = changes.day.display_name if changes.day else "unknown day"
        self._echo(f"Changes for {group} ({day}, {kind}), entries: {len(changes.changes)}.")
        self._show_applied(changes, group)

    def show_help(self) -> None:
        self._echo("Supported commands:")
        for item in fields(self.descriptions):
            self._echo(f"  {item.name:<10} {getattr(self.descriptions, item.name)}")
        self._echo(f"\n{SCHEDULE_USAGE}\n{CHANGES_USAGE}\n{PARSE_USAGE}")

    def initialize_basic_parsing_process_by_arguments(self, args: Sequence[str]) -> None:
        """Parse a file of either kind and print the whole result."""

        if not args:
            self._echo(PARSE_USAGE)
            return
        kind, rest = args[0].lower(), list(args[1:])
        if kind not in ("schedule", "changes"):
            kind, rest = self._guess_kind(args[0]), list(args)
        if kind is None:
            self._echo(f"Can't guess document kind of {args[0]}. {PARSE_USAGE}")
            return

        previous = self.last_result
        LOGGER.debug("Basic parsing of %s with %s", kind, rest)
        if kind == "schedule":
            self.parse_schedule(rest)
        else:
            self.parse_changes(rest)
        if self.last_result is not previous:
            self.show_last_result()

    def write_last_result(self) -> None:
        if self.last_result is None:
            self._echo("Nothing to write yet, parse a schedule or changes first.")
            return

        slug = slugify_group_name(self.last_group)
        name = f"changes-{slug}.json" if isinstance(self.last_result, Changes) else f"{slug}.json"
        path = Path(self.settings.output_dir) / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.last_result.to_json(), encoding="utf-8")
        except OSError as exc:
            LOGGER.error("Failed to write %s: %s", path, exc)
            self._echo(f"Can't write {path}: {exc}")
            return
        LOGGER.info("Result written to %s", path)
        self._echo(f"Result written to {path}")

    def show_last_result(self) -> None:
        if self.last_result is None:
            self._echo("Nothing to show yet, parse a schedule or changes first.")
            return
        self._echo(self.last_result.to_json())

    def exit(self) -> None:
        self._echo("Bye!")
        raise SystemExit(0)

    def _resolve_args(self, args: Sequence[str]) -> Tuple[Optional[str], Optional[str]]:
        path = args[0] if args else None
        group = " ".join(args[1:]) if len(args) > 1 else self.settings.default_group
        return path, group

    def _parse(self, parser: Callable[[str, Optional[str]], T], path: str, group: Optional[str]) -> Optional[T]:
        try:
            return parser(path, group)
        except FileNotFoundError:
            LOGGER.error("File not found: %s", path)
            self._echo(f"File not found: {path}")
        except ScheduleParseError as exc:
            LOGGER.error("Failed to parse %s: %s", path, exc)
            self._echo(f"Can't parse {path}: {exc}")
        except OSError as exc:
            LOGGER.error("Failed to read %s: %s", path, exc)
            self._echo(f"Can't read {path}: {exc}")
        return None

    def _remember(self, result: Result, group: Optional[str]) -> None:
        self.last_result = result
        self.last_group = group

    def _show_applied(self, changes: Changes, group: str) -> None:
        schedule = self.schedule
        if schedule is None or changes.day is None:
            return
        if (schedule.group_name or "").lower() != group.lower():
            return
        day = schedule.get_day(changes.day) or DaySchedule(day=changes.day)
        self._echo(format_day_text(day.apply(changes)))

    @staticmethod
    def _guess_kind(path: str) -> Optional[str]:
        suffix = Path(path).suffix.lower()
        if suffix in SCHEDULE_SUFFIXES:
            return "schedule"
        if suffix in CHANGES_SUFFIXES:
            return "changes"
        return None


__all__ = ["ConsoleController", "SCHEDULE_USAGE", "CHANGES_USAGE", "PARSE_USAGE"]
