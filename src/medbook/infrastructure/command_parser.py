"""Command-line adapter: turn a line of text into a Command.

A line is ``WORD [PREAMBLE] [prefix/value ...]``. Prefixes are only recognised at
the start of the arguments or after whitespace; anything else stays part of the
previous value.
"""

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime

from medbook.application.appointment_commands import (
    STATUS_COMPLETED,
    STATUS_MISSED,
    AddAppointmentCommand,
    AppointmentContainsKeywords,
    DeleteAppointmentCommand,
    EditAppointmentCommand,
    FindAppointmentCommand,
    ListAppointmentsCommand,
    MarkAppointmentCommand,
)
from medbook.application.commands import (
    ClearCommand,
    Command,
    ExitCommand,
    HelpCommand,
    build_record,
)
from medbook.application.descriptors import (
    EditAppointmentDescriptor,
    EditPatientDescriptor,
    PatientReference,
)
from medbook.application.errors import ParseError
from medbook.application.patient_commands import (
    AddPatientCommand,
    DeletePatientCommand,
    EditPatientCommand,
    FindPatientCommand,
    ListPatientsCommand,
    NameContainsKeywords,
)
from medbook.application.syntax import (
    APPOINTMENT_PREFIXES,
    PATIENT_PREFIXES,
    PREFIX_ADDRESS,
    PREFIX_BIRTHDATE,
    PREFIX_BLOOD_TYPE,
    PREFIX_DESCRIPTION,
    PREFIX_EMAIL,
    PREFIX_END,
    PREFIX_GENDER,
    PREFIX_NAME,
    PREFIX_PATIENT,
    PREFIX_PHONE,
    PREFIX_REMARK,
    PREFIX_START,
    PREFIX_TAG,
)
from medbook.domain import DATETIME_FORMAT, Patient
from medbook.infrastructure.phone import normalize_phone

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

MESSAGE_INVALID_FORMAT = "Invalid command format!\n{}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command. Type 'help' to see the available commands."
MESSAGE_DUPLICATE_PREFIXES = "Multiple values specified for the following single-valued field(s): {}"

_INDEX_RE = re.compile(r"^\d+$")

# Mapping of prefix -> descriptor attribute for the simple string fields.
_PATIENT_TEXT_FIELDS = {
    PREFIX_NAME: "name",
    PREFIX_EMAIL: "email",
    PREFIX_ADDRESS: "address",
    PREFIX_GENDER: "gender",
    PREFIX_BLOOD_TYPE: "blood_type",
    PREFIX_REMARK: "remark",
}


class ArgumentMultimap:
    """Values found for each prefix, in order, plus the text before the first prefix."""

    def __init__(self, preamble: str, values: dict[str, list[str]]) -> None:
        self.preamble = preamble
        self._values = values

    def has(self, prefix: str) -> bool:
        return prefix in self._values

    def get_value(self, prefix: str) -> str | None:
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all(self, prefix: str) -> list[str]:
        return list(self._values.get(prefix, []))

    def verify_no_duplicates(self, *prefixes: str) -> None:
        repeated = [p for p in prefixes if len(self._values.get(p, [])) > 1]
        if repeated:
            raise ParseError(MESSAGE_DUPLICATE_PREFIXES.format(" ".join(repeated)))


def tokenize(args: str, prefixes: Iterable[str]) -> ArgumentMultimap:
    """Split args on the given prefixes."""
    ordered = sorted(set(prefixes), key=len, reverse=True)
    pattern = re.compile(r"(?:(?<=\s)|^)(" + "|".join(re.escape(p) for p in ordered) + ")")
    matches = list(pattern.finditer(args))
    if not matches:
        return ArgumentMultimap(args.strip(), {})

    values: dict[str, list[str]] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(args)
        values.setdefault(match.group(1), []).append(args[match.end():end].strip())
    return ArgumentMultimap(args[: matches[0].start()].strip(), values)


def parse_index(text: str, usage: str) -> int:
    """Parse a displayed-list index. Range checks happen when the command runs."""
    text = (text or "").strip()
    if not _INDEX_RE.match(text):
        raise ParseError(MESSAGE_INVALID_FORMAT.format(usage))
    return int(text)


def parse_datetime(text: str) -> datetime:
    try:
        return datetime.strptime(" ".join(text.split()), DATETIME_FORMAT)
    except ValueError as exc:
        raise ParseError(
            f"Date-time '{text}' should be in the format YYYY-MM-DD HH:MM."
        ) from exc


def parse_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(f"Date '{text}' should be in the format YYYY-MM-DD.") from exc


def parse_tags(values: list[str]) -> frozenset[str]:
    """A single empty value means 'no tags'."""
    if values == [""]:
        return frozenset()
    if any(not v for v in values):
        raise ParseError("Tags must not be empty.")
    return frozenset(values)


def parse_keywords(args: str, usage: str) -> tuple[str, ...]:
    keywords = tuple(args.split())
    if not keywords:
        raise ParseError(MESSAGE_INVALID_FORMAT.format(usage))
    return keywords


class CommandParser:
    """Parses command lines. Holds the default phone region for numbers without '+'."""

    def __init__(self, phone_region: str | None = None) -> None:
        self._phone_region = phone_region
        self._parsers = {
            AddPatientCommand.COMMAND_WORD: self._parse_add_patient,
            EditPatientCommand.COMMAND_WORD: self._parse_edit_patient,
            DeletePatientCommand.COMMAND_WORD: self._parse_delete_patient,
            FindPatientCommand.COMMAND_WORD: self._parse_find_patient,
            ListPatientsCommand.COMMAND_WORD: lambda args: ListPatientsCommand(),
            AddAppointmentCommand.COMMAND_WORD: self._parse_add_appointment,
            EditAppointmentCommand.COMMAND_WORD: self._parse_edit_appointment,
            DeleteAppointmentCommand.COMMAND_WORD: self._parse_delete_appointment,
            FindAppointmentCommand.COMMAND_WORD: self._parse_find_appointment,
            ListAppointmentsCommand.COMMAND_WORD: lambda args: ListAppointmentsCommand(),
            MarkAppointmentCommand.COMPLETE_WORD: lambda args: self._parse_mark(args, STATUS_COMPLETED),
            MarkAppointmentCommand.MISS_WORD: lambda args: self._parse_mark(args, STATUS_MISSED),
            ClearCommand.COMMAND_WORD: lambda args: ClearCommand(),
            HelpCommand.COMMAND_WORD: lambda args: HelpCommand(usage_text()),
            ExitCommand.COMMAND_WORD: lambda args: ExitCommand(),
        }

    def parse(self, line: str) -> Command:
        line = (line or "").strip()
        if not line:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)
        word, _, args = line.partition(" ")
        parser = self._parsers.get(word.lower())
        if parser is None:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)
        logger.debug("Parsing %r with args %r", word, args)
        return parser(" " + args)

    def parse_phone(self, text: str) -> str:
        phone = normalize_phone(text, default_region=self._phone_region)
        if phone is None:
            raise ParseError(f"Phone number '{text.strip()}' is not a valid number.")
        return phone

    # --- patients ---

    def _parse_add_patient(self, args: str) -> AddPatientCommand:
        usage = AddPatientCommand.MESSAGE_USAGE
        argmap = tokenize(args, PATIENT_PREFIXES)
        required = (
            PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS,
            PREFIX_GENDER, PREFIX_BIRTHDATE, PREFIX_BLOOD_TYPE,
        )
        if argmap.preamble or not all(argmap.has(p) for p in required):
            raise ParseError(MESSAGE_INVALID_FORMAT.format(usage))
        argmap.verify_no_duplicates(*required, PREFIX_REMARK)

        phone = self.parse_phone(argmap.get_value(PREFIX_PHONE))
        birthdate = parse_date(argmap.get_value(PREFIX_BIRTHDATE))
        tags = parse_tags(argmap.get_all(PREFIX_TAG)) if argmap.has(PREFIX_TAG) else frozenset()
        patient = build_record(
            lambda: Patient(
                name=argmap.get_value(PREFIX_NAME),
                phone=phone,
                email=argmap.get_value(PREFIX_EMAIL),
                address=argmap.get_value(PREFIX_ADDRESS),
                gender=argmap.get_value(PREFIX_GENDER),
                birthdate=birthdate,
                blood_type=argmap.get_value(PREFIX_BLOOD_TYPE),
                remark=argmap.get_value(PREFIX_REMARK) or "",
                tags=tags,
            )
        )
        return AddPatientCommand(patient)

    def _parse_edit_patient(self, args: str) -> EditPatientCommand:
        argmap = tokenize(args, PATIENT_PREFIXES)
        index = parse_index(argmap.preamble, EditPatientCommand.MESSAGE_USAGE)
        argmap.verify_no_duplicates(*(p for p in PATIENT_PREFIXES if p != PREFIX_TAG))

        descriptor = EditPatientDescriptor()
        for prefix, attribute in _PATIENT_TEXT_FIELDS.items():
            if argmap.has(prefix):
                setattr(descriptor, attribute, argmap.get_value(prefix))
        if argmap.has(PREFIX_PHONE):
            descriptor.phone = self.parse_phone(argmap.get_value(PREFIX_PHONE))
        if argmap.has(PREFIX_BIRTHDATE):
            descriptor.birthdate = parse_date(argmap.get_value(PREFIX_BIRTHDATE))
        if argmap.has(PREFIX_TAG):
            descriptor.tags = parse_tags(argmap.get_all(PREFIX_TAG))
        return EditPatientCommand(index, descriptor)

    def _parse_delete_patient(self, args: str) -> DeletePatientCommand:
        return DeletePatientCommand(parse_index(args, DeletePatientCommand.MESSAGE_USAGE))

    def _parse_find_patient(self, args: str) -> FindPatientCommand:
        keywords = parse_keywords(args, FindPatientCommand.MESSAGE_USAGE)
        return FindPatientCommand(NameContainsKeywords(keywords))

    # --- appointments ---

    def _parse_add_appointment(self, args: str) -> AddAppointmentCommand:
        usage = AddAppointmentCommand.MESSAGE_USAGE
        argmap = tokenize(args, APPOINTMENT_PREFIXES)
        required = (PREFIX_START, PREFIX_END, PREFIX_PATIENT, PREFIX_DESCRIPTION)
        if argmap.preamble or not all(argmap.has(p) for p in required):
            raise ParseError(MESSAGE_INVALID_FORMAT.format(usage))
        argmap.verify_no_duplicates(*required)

        tags = parse_tags(argmap.get_all(PREFIX_TAG)) if argmap.has(PREFIX_TAG) else frozenset()
        return AddAppointmentCommand(
            start=parse_datetime(argmap.get_value(PREFIX_START)),
            end=parse_datetime(argmap.get_value(PREFIX_END)),
            patient=_patient_reference(argmap.get_value(PREFIX_PATIENT)),
            description=argmap.get_value(PREFIX_DESCRIPTION),
            tags=tags,
        )

    def _parse_edit_appointment(self, args: str) -> EditAppointmentCommand:
        argmap = tokenize(args, APPOINTMENT_PREFIXES)
        index = parse_index(argmap.preamble, EditAppointmentCommand.MESSAGE_USAGE)
        argmap.verify_no_duplicates(PREFIX_START, PREFIX_END, PREFIX_PATIENT, PREFIX_DESCRIPTION)

        descriptor = EditAppointmentDescriptor()
        if argmap.has(PREFIX_START):
            descriptor.start = parse_datetime(argmap.get_value(PREFIX_START))
        if argmap.has(PREFIX_END):
            descriptor.end = parse_datetime(argmap.get_value(PREFIX_END))
        if argmap.has(PREFIX_PATIENT):
            descriptor.patient = _patient_reference(argmap.get_value(PREFIX_PATIENT))
        if argmap.has(PREFIX_DESCRIPTION):
            descriptor.description = argmap.get_value(PREFIX_DESCRIPTION)
        if argmap.has(PREFIX_TAG):
            descriptor.tags = parse_tags(argmap.get_all(PREFIX_TAG))
        return EditAppointmentCommand(index, descriptor)

    def _parse_delete_appointment(self, args: str) -> DeleteAppointmentCommand:
        return DeleteAppointmentCommand(parse_index(args, DeleteAppointmentCommand.MESSAGE_USAGE))

    def _parse_find_appointment(self, args: str) -> FindAppointmentCommand:
        keywords = parse_keywords(args, FindAppointmentCommand.MESSAGE_USAGE)
        return FindAppointmentCommand(AppointmentContainsKeywords(keywords))

    def _parse_mark(self, args: str, status: str) -> MarkAppointmentCommand:
        return MarkAppointmentCommand(parse_index(args, MarkAppointmentCommand.MESSAGE_USAGE), status)


def _patient_reference(text: str) -> PatientReference:
    try:
        return PatientReference(text)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc


def usage_text() -> str:
    """Every command's usage, separated by blank lines."""
    commands = (
        AddPatientCommand, EditPatientCommand, DeletePatientCommand,
        FindPatientCommand, ListPatientsCommand,
        AddAppointmentCommand, EditAppointmentCommand, DeleteAppointmentCommand,
        FindAppointmentCommand, ListAppointmentsCommand, MarkAppointmentCommand,
        ClearCommand, HelpCommand, ExitCommand,
    )
    return "\n\n".join(c.MESSAGE_USAGE for c in commands)
