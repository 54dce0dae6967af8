from __future__ import annotations

import logging
from typing import Callable, Optional

from commands import BoundCommand, CommandRegistry, build_registry, parse_input
from config import get_settings
from controller import ConsoleController
from locales import get_descriptions
from time_utils import current_hour

LOGGER = logging.getLogger(__name__)

COMMAND_PROMPT = "So, what you want to do now?\nEnter command code: "
UNSUPPORTED_MESSAGE = (
    "Inputted command isn't supported, please enter 'help' to get list of supported ones.\n"
)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def greeting(user: str, hour: int) -> str:
    """Return a greeting for ``user`` depending on the hour of the day."""

    if hour == 23:
        return f"\nNight's become. Civilians lies to sleep and mafia wakes up. Beware, {user}..."
    if hour <= 6:
        return f"\nGood night, {user}!"
    if hour <= 9:
        return f"\nGood morning, {user}!"
    if hour <= 16:
        return f"\nGood afternoon, {user}!"
    return f"\nGood evening, {user}!"


class ConsoleSession:
    """Interactive loop: read a command, confirm it, execute it, repeat.

    The session ends on a blank line or end of input.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        user: str,
        reader: Reader = input,
        writer: Writer = print,
        clock: Callable[[], int] = current_hour,
    ) -> None:
        self.registry = registry
        self.user = user
        self._read = reader
        self._write = writer
        self._clock = clock

    def begin_session(self) -> int:
        """Greet the user and run the loop. Return the number of executed commands."""

        self._write(greeting(self.user, self._clock()))
        executed = 0
        while True:
            line = self._read_line(COMMAND_PROMPT)
            if line is None or not line.strip():
                break
            if self.perform_user_input(line):
                executed += 1
        LOGGER.info("Session of %s ended, %s commands executed", self.user, executed)
        return executed

    def perform_user_input(self, line: str) -> bool:
        """Handle one non-blank input line. Return True if a command ran."""

        info = parse_input(self.registry, line.strip())
        if info.action is None:
            LOGGER.debug("Unsupported command: %s", line.strip())
            self._write(UNSUPPORTED_MESSAGE)
            return False

        description, command = info.action
        if not self.confirm_command_execution(description):
            return False
        self.execute_command(command.bind(info.args))
        return True

    def confirm_command_execution(self, description: str) -> bool:
        answer = self._read_line(f"Selected command: {description}. \nAre you sure (Y/N)? ")
        return answer is not None and answer.strip().lower() == "y"

    def execute_command(self, command: BoundCommand) -> None:
        """Run ``command`` with its output framed by start and end markers."""

        self._write(f"\n\t\tCommand ('{command.name}') Output:")
        try:
            command.execute()
        except Exception as exc:
            LOGGER.exception("Command %s failed", command.name)
            self._write(f"\t\tExecution failed: {exc}\n")
            return
        self._write("\t\tExecution complete.\n")

    def _read_line(self, prompt: str) -> Optional[str]:
        try:
            return self._read(prompt)
        except EOFError:
            return None


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    descriptions = get_descriptions(settings.locale)
    controller = ConsoleController(settings, descriptions)
    registry = build_registry(controller, descriptions)
    session = ConsoleSession(
        registry,
        settings.admin_user,
        clock=lambda: current_hour(settings.timezone),
    )
    session.begin_session()


if __name__ == "__main__":
    main()
