"""Application layer: commands, descriptors, ports, and results. Depends only on domain."""

from medbook.application.appointment_commands import (
    AddAppointmentCommand,
    AppointmentContainsKeywords,
    DeleteAppointmentCommand,
    EditAppointmentCommand,
    FindAppointmentCommand,
    ListAppointmentsCommand,
    MarkAppointmentCommand,
)
from medbook.application.clinic_service import ClinicService
from medbook.application.commands import ClearCommand, Command, ExitCommand, HelpCommand
from medbook.application.descriptors import (
    UNSET,
    EditAppointmentDescriptor,
    EditPatientDescriptor,
    PatientReference,
)
from medbook.application.editing import (
    apply_appointment_edit,
    apply_patient_edit,
    find_collision,
    resolve_patient,
)
from medbook.application.errors import (
    CommandError,
    DuplicateRecordError,
    IndexOutOfRangeError,
    InvalidValueError,
    NoFieldsEditedError,
    ParseError,
    ReferenceResolutionError,
)
from medbook.application.patient_commands import (
    AddPatientCommand,
    DeletePatientCommand,
    EditPatientCommand,
    FindPatientCommand,
    ListPatientsCommand,
    NameContainsKeywords,
)
from medbook.application.ports import ClinicStore, CommandLineParser, show_all
from medbook.application.results import CommandFailed, CommandResult

__all__ = [
    "UNSET",
    "AddAppointmentCommand",
    "AddPatientCommand",
    "AppointmentContainsKeywords",
    "ClearCommand",
    "ClinicService",
    "ClinicStore",
    "Command",
    "CommandError",
    "CommandFailed",
    "CommandLineParser",
    "CommandResult",
    "DeleteAppointmentCommand",
    "DeletePatientCommand",
    "DuplicateRecordError",
    "EditAppointmentCommand",
    "EditAppointmentDescriptor",
    "EditPatientCommand",
    "EditPatientDescriptor",
    "ExitCommand",
    "FindAppointmentCommand",
    "FindPatientCommand",
    "HelpCommand",
    "IndexOutOfRangeError",
    "InvalidValueError",
    "ListAppointmentsCommand",
    "ListPatientsCommand",
    "MarkAppointmentCommand",
    "NameContainsKeywords",
    "NoFieldsEditedError",
    "ParseError",
    "PatientReference",
    "ReferenceResolutionError",
    "apply_appointment_edit",
    "apply_patient_edit",
    "find_collision",
    "resolve_patient",
    "show_all",
]
