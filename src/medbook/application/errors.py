"""User-facing command errors. Each one rejects a single command; none is fatal."""


class CommandError(Exception):
    """Base class. The message is shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(CommandError):
    """The command line could not be turned into a command."""


class IndexOutOfRangeError(CommandError):
    """The index does not address an entry of the displayed list."""


class NoFieldsEditedError(CommandError):
    """An edit command was given nothing to change."""


class DuplicateRecordError(CommandError):
    """The result would collide with another stored record."""


class InvalidValueError(CommandError):
    """A record could not be built from the given values."""


class ReferenceResolutionError(CommandError):
    """A patient referenced by name does not exist."""

    def __init__(self, text: str) -> None:
        super().__init__(f"No patient named '{text}' was found.")
        self.text = text
