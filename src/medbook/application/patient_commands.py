"""Commands on patients: add, edit, delete, find, list."""

import dataclasses
import logging
from dataclasses import dataclass

from medbook.application.commands import Command, build_record, select_displayed
from medbook.application.descriptors import EditPatientDescriptor
from medbook.application.editing import apply_patient_edit, find_patient_collision
from medbook.application.errors import DuplicateRecordError, NoFieldsEditedError
from medbook.application.ports import ClinicStore, show_all
from medbook.application.results import CommandResult
from medbook.application.syntax import (
    PREFIX_ADDRESS,
    PREFIX_BIRTHDATE,
    PREFIX_BLOOD_TYPE,
    PREFIX_EMAIL,
    PREFIX_GENDER,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_REMARK,
    PREFIX_TAG,
)
from medbook.domain import Patient

logger = logging.getLogger(__name__)

MESSAGE_INVALID_PATIENT_INDEX = "The patient index provided is invalid."
MESSAGE_DUPLICATE_PATIENT = "This patient already exists in the clinic records."


@dataclass(frozen=True)
class NameContainsKeywords:
    """Matches patients whose name contains any keyword as a whole word."""

    keywords: tuple[str, ...]

    def __call__(self, patient: Patient) -> bool:
        words = {w.casefold() for w in patient.name.split()}
        return any(k.casefold() in words for k in self.keywords)


@dataclass(frozen=True)
class AddPatientCommand(Command):
    patient: Patient

    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Adds a patient.\n"
        "Parameters: "
        f"{PREFIX_NAME}NAME {PREFIX_PHONE}PHONE {PREFIX_EMAIL}EMAIL {PREFIX_ADDRESS}ADDRESS "
        f"{PREFIX_GENDER}GENDER {PREFIX_BIRTHDATE}BIRTHDATE {PREFIX_BLOOD_TYPE}BLOOD_TYPE "
        f"[{PREFIX_REMARK}REMARK] [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} {PREFIX_NAME}John Doe {PREFIX_PHONE}+6598765432 "
        f"{PREFIX_EMAIL}johnd@example.com {PREFIX_ADDRESS}311, Clementi Ave 2 "
        f"{PREFIX_GENDER}M {PREFIX_BIRTHDATE}1990-01-31 {PREFIX_BLOOD_TYPE}O+ {PREFIX_TAG}diabetic"
    )
    MESSAGE_SUCCESS = "New patient added: {}"

    def execute(self, store: ClinicStore) -> CommandResult:
        if find_patient_collision(self.patient, store) is not None:
            raise DuplicateRecordError(MESSAGE_DUPLICATE_PATIENT)
        store.add_patient(self.patient)
        logger.info("Added patient %s", self.patient.name)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.patient))


@dataclass(frozen=True)
class EditPatientCommand(Command):
    """Edits the patient at a displayed index. Appointments follow the edited patient."""

    index: int
    descriptor: EditPatientDescriptor

    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Edits the details of the patient identified "
        "by the index number used in the displayed patient list.\n"
        "Existing values will be overwritten by the input values.\n"
        "Parameters: INDEX (must be a positive integer) "
        f"[{PREFIX_NAME}NAME] [{PREFIX_PHONE}PHONE] [{PREFIX_EMAIL}EMAIL] "
        f"[{PREFIX_ADDRESS}ADDRESS] [{PREFIX_GENDER}GENDER] [{PREFIX_BIRTHDATE}BIRTHDATE] "
        f"[{PREFIX_BLOOD_TYPE}BLOOD_TYPE] [{PREFIX_REMARK}REMARK] [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_PHONE}+6591234567 {PREFIX_EMAIL}johndoe@example.com"
    )
    MESSAGE_SUCCESS = "Edited Patient: {}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."

    def __post_init__(self):
        object.__setattr__(self, "descriptor", dataclasses.replace(self.descriptor))

    def execute(self, store: ClinicStore) -> CommandResult:
        target = select_displayed(
            store.filtered_patients(), self.index, MESSAGE_INVALID_PATIENT_INDEX
        )
        if not self.descriptor.is_any_field_edited():
            raise NoFieldsEditedError(self.MESSAGE_NOT_EDITED)

        edited = build_record(lambda: apply_patient_edit(target, self.descriptor))

        if find_patient_collision(edited, store, replacing=target) is not None:
            raise DuplicateRecordError(MESSAGE_DUPLICATE_PATIENT)

        store.set_patient(target, edited)
        store.update_patient_filter(show_all)
        logger.info("Edited patient %s: %s", target.name, sorted(self.descriptor.edited_fields()))
        return CommandResult(self.MESSAGE_SUCCESS.format(edited))


@dataclass(frozen=True)
class DeletePatientCommand(Command):
    """Deletes a patient together with their appointments."""

    index: int

    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Deletes the patient identified by the index number used in the "
        "displayed patient list, along with their appointments.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMMAND_WORD} 1"
    )
    MESSAGE_SUCCESS = "Deleted Patient: {}"

    def execute(self, store: ClinicStore) -> CommandResult:
        target = select_displayed(
            store.filtered_patients(), self.index, MESSAGE_INVALID_PATIENT_INDEX
        )
        removed = store.delete_patient(target)
        logger.info("Deleted patient %s and %d appointment(s)", target.name, len(removed))
        message = self.MESSAGE_SUCCESS.format(target)
        if removed:
            message += f"\n{len(removed)} appointment(s) of this patient were also deleted."
        return CommandResult(message)


@dataclass(frozen=True)
class FindPatientCommand(Command):
    predicate: NameContainsKeywords

    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        COMMAND_WORD + ": Finds all patients whose names contain any of "
        "the specified keywords (case-insensitive) and displays them as a list.\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        f"Example: {COMMAND_WORD} alice bob charlie"
    )
    MESSAGE_SUCCESS = "{} patient(s) listed!"

    def execute(self, store: ClinicStore) -> CommandResult:
        store.update_patient_filter(self.predicate)
        return CommandResult(self.MESSAGE_SUCCESS.format(len(store.filtered_patients())))


class ListPatientsCommand(Command):
    COMMAND_WORD = "list"
    MESSAGE_USAGE = COMMAND_WORD + ": Lists all patients."
    MESSAGE_SUCCESS = "Listed all patients."

    def execute(self, store: ClinicStore) -> CommandResult:
        store.update_patient_filter(show_all)
        return CommandResult(self.MESSAGE_SUCCESS)

    def __eq__(self, other) -> bool:
        return isinstance(other, ListPatientsCommand)
