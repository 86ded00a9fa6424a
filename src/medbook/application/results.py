"""Result types returned from the service boundary."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """A command ran to completion."""

    feedback: str
    show_help: bool = False
    exit: bool = False


@dataclass(frozen=True)
class CommandFailed:
    """A command was rejected; nothing in the store changed."""

    message: str
