"""
medbook core: clean-architecture layout.

- domain: entities (Patient, Appointment, AppointmentTime). No outer dependencies.
- application: commands, edit descriptors, ports (ClinicStore), ClinicService.
- infrastructure: adapters (InMemoryClinicStore, CommandParser, seed loader).
"""

from medbook.application import (
    ClinicService,
    ClinicStore,
    CommandError,
    CommandFailed,
    CommandResult,
    EditAppointmentDescriptor,
    EditPatientDescriptor,
)
from medbook.domain import Appointment, AppointmentTime, Patient
from medbook.infrastructure import CommandParser, InMemoryClinicStore


def create_service(phone_region: str | None = None) -> ClinicService:
    """Return a ClinicService over an empty in-memory store."""
    return ClinicService(InMemoryClinicStore(), CommandParser(phone_region=phone_region))


__all__ = [
    "Appointment",
    "AppointmentTime",
    "ClinicService",
    "ClinicStore",
    "CommandError",
    "CommandFailed",
    "CommandParser",
    "CommandResult",
    "EditAppointmentDescriptor",
    "EditPatientDescriptor",
    "InMemoryClinicStore",
    "Patient",
    "create_service",
]
