"""Commands on appointments: add, edit, delete, find, list, and status marking."""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime

from medbook.application.commands import Command, build_record, select_displayed
from medbook.application.descriptors import EditAppointmentDescriptor, PatientReference
from medbook.application.editing import (
    apply_appointment_edit,
    find_appointment_collision,
    resolve_patient_reference,
)
from medbook.application.errors import DuplicateRecordError, NoFieldsEditedError
from medbook.application.ports import ClinicStore, show_all
from medbook.application.results import CommandResult
from medbook.application.syntax import (
    PREFIX_DESCRIPTION,
    PREFIX_END,
    PREFIX_PATIENT,
    PREFIX_START,
    PREFIX_TAG,
)
from medbook.domain import Appointment, AppointmentTime

logger = logging.getLogger(__name__)

MESSAGE_INVALID_APPOINTMENT_INDEX = "The appointment index provided is invalid."
MESSAGE_DUPLICATE_APPOINTMENT = "This appointment already exists in the clinic records."

STATUS_COMPLETED = "completed"
STATUS_MISSED = "missed"


@dataclass(frozen=True)
class AppointmentContainsKeywords:
    """Matches appointments whose description or patient name contains any keyword."""

    keywords: tuple[str, ...]

    def __call__(self, appointment: Appointment) -> bool:
        words = {
            w.casefold()
            for w in (appointment.description + " " + appointment.patient.name).split()
        }
        return any(k.casefold() in words for k in self.keywords)


@dataclass(frozen=True)
class AddAppointmentCommand(Command):
    """Books an appointment for a patient referenced by name."""

    start: datetime
    end: datetime
    patient: PatientReference
    description: str
    tags: frozenset[str] = field(default_factory=frozenset)

    COMMAND_WORD = "a-add"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Adds an appointment for an existing patient.\n"
        "Parameters: "
        f"{PREFIX_START}START {PREFIX_END}END {PREFIX_PATIENT}PATIENT "
        f"{PREFIX_DESCRIPTION}DESCRIPTION [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} {PREFIX_START}2020-02-05 09:00 {PREFIX_END}2020-02-05 10:00 "
        f"{PREFIX_PATIENT}John Doe {PREFIX_DESCRIPTION}Physiotherapy"
    )
    MESSAGE_SUCCESS = "New appointment added: {}"

    def __post_init__(self):
        object.__setattr__(self, "tags", frozenset(self.tags))

    def execute(self, store: ClinicStore) -> CommandResult:
        patient = resolve_patient_reference(self.patient, store)
        appointment = build_record(
            lambda: Appointment(
                time=AppointmentTime(self.start, self.end),
                patient=patient,
                description=self.description,
                tags=self.tags,
            )
        )
        if find_appointment_collision(appointment, store) is not None:
            raise DuplicateRecordError(MESSAGE_DUPLICATE_APPOINTMENT)
        store.add_appointment(appointment)
        logger.info("Added appointment for %s at %s", patient.name, appointment.time)
        return CommandResult(self.MESSAGE_SUCCESS.format(appointment))


@dataclass(frozen=True)
class EditAppointmentCommand(Command):
    """Edits the appointment at a displayed index. Status flags are never changed here."""

    index: int
    descriptor: EditAppointmentDescriptor

    COMMAND_WORD = "a-edit"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Edits the details of the appointment identified "
        "by the index number used in the displayed appointment list.\n"
        "Existing values will be overwritten by the input values.\n"
        "Parameters: INDEX (must be a positive integer) "
        f"[{PREFIX_START}START] [{PREFIX_END}END] [{PREFIX_PATIENT}PATIENT] "
        f"[{PREFIX_DESCRIPTION}DESCRIPTION] [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_START}2020-02-05 09:00 "
        f"{PREFIX_DESCRIPTION}Therapy session"
    )
    MESSAGE_SUCCESS = "Edited Appointment: {}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."

    def __post_init__(self):
        object.__setattr__(self, "descriptor", dataclasses.replace(self.descriptor))

    def execute(self, store: ClinicStore) -> CommandResult:
        target = select_displayed(
            store.filtered_appointments(), self.index, MESSAGE_INVALID_APPOINTMENT_INDEX
        )
        if not self.descriptor.is_any_field_edited():
            raise NoFieldsEditedError(self.MESSAGE_NOT_EDITED)

        edited = build_record(lambda: apply_appointment_edit(target, self.descriptor, store))

        if find_appointment_collision(edited, store, replacing=target) is not None:
            raise DuplicateRecordError(MESSAGE_DUPLICATE_APPOINTMENT)

        store.set_appointment(target, edited)
        store.update_appointment_filter(show_all)
        logger.info(
            "Edited appointment at %s: %s", target.time, sorted(self.descriptor.edited_fields())
        )
        return CommandResult(self.MESSAGE_SUCCESS.format(edited))


@dataclass(frozen=True)
class DeleteAppointmentCommand(Command):
    index: int

    COMMAND_WORD = "a-delete"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Deletes the appointment identified by the index number used in the "
        "displayed appointment list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMMAND_WORD} 1"
    )
    MESSAGE_SUCCESS = "Deleted Appointment: {}"

    def execute(self, store: ClinicStore) -> CommandResult:
        target = select_displayed(
            store.filtered_appointments(), self.index, MESSAGE_INVALID_APPOINTMENT_INDEX
        )
        store.delete_appointment(target)
        logger.info("Deleted appointment at %s", target.time)
        return CommandResult(self.MESSAGE_SUCCESS.format(target))


@dataclass(frozen=True)
class FindAppointmentCommand(Command):
    predicate: AppointmentContainsKeywords

    COMMAND_WORD = "a-find"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Finds all appointments whose description or patient name "
        "contains any of the specified keywords (case-insensitive).\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        f"Example: {COMMAND_WORD} therapy alice"
    )
    MESSAGE_SUCCESS = "{} appointment(s) listed!"

    def execute(self, store: ClinicStore) -> CommandResult:
        store.update_appointment_filter(self.predicate)
        return CommandResult(self.MESSAGE_SUCCESS.format(len(store.filtered_appointments())))


class ListAppointmentsCommand(Command):
    COMMAND_WORD = "a-list"
    MESSAGE_USAGE = COMMAND_WORD + ": Lists all appointments."
    MESSAGE_SUCCESS = "Listed all appointments."

    def execute(self, store: ClinicStore) -> CommandResult:
        store.update_appointment_filter(show_all)
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other) -> bool:
        return isinstance(other, ListAppointmentsCommand)


@dataclass(frozen=True)
class MarkAppointmentCommand(Command):
    """Marks an appointment completed or missed. The two statuses exclude each other."""

    index: int
    status: str

    COMPLETE_WORD = "a-complete"
    MISS_WORD = "a-miss"
    MESSAGE_USAGE = (
        f"{COMPLETE_WORD} / {MISS_WORD}: Marks the appointment identified by the index number "
        "used in the displayed appointment list as completed or missed.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMPLETE_WORD} 1"
    )
    MESSAGE_SUCCESS = "Marked appointment as {}: {}"

    def __post_init__(self):
        if self.status not in (STATUS_COMPLETED, STATUS_MISSED):
            raise ValueError(f"Unknown appointment status '{self.status}'.")

    def execute(self, store: ClinicStore) -> CommandResult:
        target = select_displayed(
            store.filtered_appointments(), self.index, MESSAGE_INVALID_APPOINTMENT_INDEX
        )
        marked = dataclasses.replace(
            target,
            is_completed=self.status == STATUS_COMPLETED,
            is_missed=self.status == STATUS_MISSED,
        )
        store.set_appointment(target, marked)
        logger.info("Marked appointment at %s as %s", target.time, self.status)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.status, marked))
