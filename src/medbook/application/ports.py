"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from medbook.domain import Appointment, Patient

if TYPE_CHECKING:
    from medbook.application.commands import Command

PatientPredicate = Callable[[Patient], bool]
AppointmentPredicate = Callable[[Appointment], bool]


def show_all(_record) -> bool:
    return True


class ClinicStore(Protocol):
    """Owns every patient and appointment and the filtered views over them."""

    def patients(self) -> list[Patient]:
        """Return all patients in insertion order."""
        ...

    def appointments(self) -> list[Appointment]:
        """Return all appointments in insertion order."""
        ...

    def filtered_patients(self) -> list[Patient]:
        """Return the patients matching the current patient filter."""
        ...

    def filtered_appointments(self) -> list[Appointment]:
        """Return the appointments matching the current appointment filter."""
        ...

    def update_patient_filter(self, predicate: PatientPredicate) -> None:
        ...

    def update_appointment_filter(self, predicate: AppointmentPredicate) -> None:
        ...

    def has_patient(self, patient: Patient) -> bool:
        """Return True if a patient with the same identity is stored."""
        ...

    def has_appointment(self, appointment: Appointment) -> bool:
        """Return True if an appointment with the same identity is stored."""
        ...

    def add_patient(self, patient: Patient) -> None:
        ...

    def add_appointment(self, appointment: Appointment) -> None:
        ...

    def set_patient(self, target: Patient, edited: Patient) -> None:
        """Replace target with edited, including inside the target's appointments."""
        ...

    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        """Replace target with edited in place."""
        ...

    def delete_patient(self, patient: Patient) -> list[Appointment]:
        """Remove the patient and their appointments. Returns the removed appointments."""
        ...

    def delete_appointment(self, appointment: Appointment) -> None:
        ...

    def find_patient_by_name(self, text: str) -> Patient | None:
        """Return the patient whose name matches text (case-insensitive), or None."""
        ...

    def clear(self) -> None:
        ...


class CommandLineParser(Protocol):
    """Turns one line of user input into a command. Raises ParseError when it can't."""

    def parse(self, line: str) -> "Command":
        ...
