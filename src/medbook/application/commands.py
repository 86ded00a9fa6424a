"""Command base class and the commands that are not tied to one record type."""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from medbook.application.errors import IndexOutOfRangeError, InvalidValueError
from medbook.application.ports import ClinicStore
from medbook.application.results import CommandResult

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Command:
    """A parsed command, ready to run against a store."""

    COMMAND_WORD = ""
    MESSAGE_USAGE = ""

    def execute(self, store: ClinicStore) -> CommandResult:
        raise NotImplementedError


def select_displayed(view: Sequence[R], index: int, message: str) -> R:
    """Return the record at 1-based index in the displayed list."""
    if index < 1 or index > len(view):
        raise IndexOutOfRangeError(message)
    return view[index - 1]


def build_record(factory: Callable[[], R]) -> R:
    """Run a record constructor, turning domain validation failures into command errors."""
    try:
        return factory()
    except ValueError as exc:
        raise InvalidValueError(str(exc)) from exc


class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = COMMAND_WORD + ": Removes every patient and appointment."
    MESSAGE_SUCCESS = "All patient and appointment records have been cleared."

    def execute(self, store: ClinicStore) -> CommandResult:
        store.clear()
        logger.info("Store cleared")
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other) -> bool:
        return isinstance(other, ClearCommand)


class HelpCommand(Command):
    COMMAND_WORD = "help"
    MESSAGE_USAGE = COMMAND_WORD + ": Shows the usage of every command."

    def __init__(self, usage: str = "") -> None:
        self.usage = usage

    def execute(self, store: ClinicStore) -> CommandResult:
        return CommandResult(self.usage, show_help=True)

    def __eq__(self, other) -> bool:
        return isinstance(other, HelpCommand) and other.usage == self.usage


class ExitCommand(Command):
    COMMAND_WORD = "exit"
    MESSAGE_USAGE = COMMAND_WORD + ": Exits the program."
    MESSAGE_EXIT = "Goodbye."

    def execute(self, store: ClinicStore) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT, exit=True)

    def __eq__(self, other) -> bool:
        return isinstance(other, ExitCommand)
