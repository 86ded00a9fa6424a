"""Runs command lines against the store. The only place command errors are caught."""

import logging

from medbook.application.errors import CommandError
from medbook.application.ports import ClinicStore, CommandLineParser
from medbook.application.results import CommandFailed, CommandResult

logger = logging.getLogger(__name__)


class ClinicService:
    """Core flow: line -> command -> execute against store -> result or failure."""

    def __init__(self, store: ClinicStore, parser: CommandLineParser) -> None:
        self._store = store
        self._parser = parser

    @property
    def store(self) -> ClinicStore:
        return self._store

    def run(self, line: str) -> CommandResult | CommandFailed:
        """Parse and execute one line. Rejected commands leave the store untouched."""
        try:
            command = self._parser.parse(line)
            result = command.execute(self._store)
        except CommandError as exc:
            logger.info("Rejected %r: %s", line, exc.message)
            return CommandFailed(message=exc.message)
        logger.debug("Ran %r", line)
        return result
