from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple

from locales import CommandDescriptions

LOGGER = logging.getLogger(__name__)

Action = Callable[[Sequence[str]], None]


class Controller(Protocol):
    """Capabilities the console commands delegate to."""

    def parse_schedule(self, args: Sequence[str]) -> None: ...

    def parse_changes(self, args: Sequence[str]) -> None: ...

    def show_help(self) -> None: ...

    def initialize_basic_parsing_process_by_arguments(self, args: Sequence[str]) -> None: ...

    def write_last_result(self) -> None: ...

    def show_last_result(self) -> None: ...

    def exit(self) -> None: ...


@dataclass(frozen=True)
class Command:
    """Named action. The name is only shown to the user, dispatch goes by keyword."""

    name: str
    action: Action

    def bind(self, args: Iterable[str]) -> "BoundCommand":
        return BoundCommand(command=self, args=tuple(args))

    def execute(self) -> None:
        self.bind(()).execute()


@dataclass(frozen=True)
class BoundCommand:
    """Command together with the arguments of one invocation."""

    command: Command
    args: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.command.name

    def execute(self) -> None:
        LOGGER.debug("Executing %s with %s", self.command.name, self.args)
        self.command.action(list(self.args))


@dataclass(frozen=True)
class CommandInfo:
    """Result of parsing one input line. ``action`` is None for unknown commands."""

    args: Tuple[str, ...] = ()
    action: Optional[Tuple[str, Command]] = None


class CommandRegistry:
    """Read-only, case-insensitive mapping from keyword to (description, command)."""

    def __init__(self, entries: Iterable[Tuple[str, str, Command]]) -> None:
        actions: dict[str, Tuple[str, Command]] = {}
        for keyword, description, command in entries:
            key = self._normalize(keyword)
            if not key:
                raise ValueError("Command keyword must not be empty")
            if key in actions:
                raise ValueError(f"Command keyword {key!r} is registered twice")
            actions[key] = (description, command)
        self._actions = MappingProxyType(actions)

    @staticmethod
    def _normalize(keyword: str) -> str:
        return keyword.strip().lower()

    def get(self, keyword: str) -> Optional[Tuple[str, Command]]:
        return self._actions.get(self._normalize(keyword))

    def keywords(self) -> list[str]:
        return list(self._actions)

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and self._normalize(keyword) in self._actions

    def __len__(self) -> int:
        return len(self._actions)


def build_registry(controller: Controller, descriptions: CommandDescriptions) -> CommandRegistry:
    """Wire the console keywords to the controller capabilities."""

    return CommandRegistry(
        [
            # Valuable commands
            ("schedule", descriptions.schedule, Command("Schedule", controller.parse_schedule)),
            ("changes", descriptions.changes, Command("Changes", controller.parse_changes)),
            # Functional commands
            ("help", descriptions.help, Command("Help", lambda args: controller.show_help())),
            (
                "parse",
                descriptions.parse,
                Command("Parse", controller.initialize_basic_parsing_process_by_arguments),
            ),
            ("write", descriptions.write, Command("Write", lambda args: controller.write_last_result())),
            ("show", descriptions.show, Command("Show", lambda args: controller.show_last_result())),
            ("exit", descriptions.exit, Command("Exit", lambda args: controller.exit())),
        ]
    )


def parse_input(registry: CommandRegistry, raw_line: str) -> CommandInfo:
    """Split an input line into keyword and arguments and resolve the keyword."""

    tokens = raw_line.split()
    if not tokens:
        return CommandInfo()
    keyword, *args = tokens
    return CommandInfo(args=tuple(args), action=registry.get(keyword))


__all__ = [
    "Action",
    "Controller",
    "Command",
    "BoundCommand",
    "CommandInfo",
    "CommandRegistry",
    "build_registry",
    "parse_input",
]
