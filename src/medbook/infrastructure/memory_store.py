"""In-memory implementation of ClinicStore (no DB). Order preserved by insertion."""

import dataclasses
import logging

from medbook.application.errors import DuplicateRecordError
from medbook.application.ports import AppointmentPredicate, PatientPredicate, show_all
from medbook.domain import Appointment, Patient

logger = logging.getLogger(__name__)


def _index_of(records: list, target) -> int:
    for i, record in enumerate(records):
        if record is target:
            return i
    for i, record in enumerate(records):
        if record == target:
            return i
    raise LookupError(f"Record is not in the store: {target}")


class InMemoryClinicStore:
    """Stores patients and appointments in lists, with one filter per list.

    Every mutation builds the new list first and swaps it in, so a failed
    replacement leaves the store as it was.
    """

    def __init__(self) -> None:
        self._patients: list[Patient] = []
        self._appointments: list[Appointment] = []
        self._patient_filter: PatientPredicate = show_all
        self._appointment_filter: AppointmentPredicate = show_all

    # --- views ---

    def patients(self) -> list[Patient]:
        return list(self._patients)

    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    def filtered_patients(self) -> list[Patient]:
        return [p for p in self._patients if self._patient_filter(p)]

    def filtered_appointments(self) -> list[Appointment]:
        return [a for a in self._appointments if self._appointment_filter(a)]

    def update_patient_filter(self, predicate: PatientPredicate) -> None:
        self._patient_filter = predicate

    def update_appointment_filter(self, predicate: AppointmentPredicate) -> None:
        self._appointment_filter = predicate

    # --- queries ---

    def has_patient(self, patient: Patient) -> bool:
        return any(p.is_same_patient(patient) for p in self._patients)

    def has_appointment(self, appointment: Appointment) -> bool:
        return any(a.is_same_appointment(appointment) for a in self._appointments)

    def find_patient_by_name(self, text: str) -> Patient | None:
        wanted = " ".join((text or "").split()).casefold()
        if not wanted:
            return None
        for patient in self._patients:
            if patient.name.casefold() == wanted:
                return patient
        return None

    # --- mutations ---

    def add_patient(self, patient: Patient) -> None:
        if self.has_patient(patient):
            raise DuplicateRecordError("This patient already exists in the clinic records.")
        self._patients = self._patients + [patient]

    def add_appointment(self, appointment: Appointment) -> None:
        if self.has_appointment(appointment):
            raise DuplicateRecordError("This appointment already exists in the clinic records.")
        if not any(p.is_same_patient(appointment.patient) for p in self._patients):
            raise LookupError(f"Patient {appointment.patient.name} is not in the store.")
        self._appointments = self._appointments + [appointment]

    def set_patient(self, target: Patient, edited: Patient) -> None:
        position = _index_of(self._patients, target)
        if any(
            i != position and p.is_same_patient(edited)
            for i, p in enumerate(self._patients)
        ):
            raise DuplicateRecordError("This patient already exists in the clinic records.")

        patients = list(self._patients)
        patients[position] = edited
        appointments = [
            dataclasses.replace(a, patient=edited) if a.patient.is_same_patient(target) else a
            for a in self._appointments
        ]
        self._patients, self._appointments = patients, appointments
        logger.debug("Replaced patient at position %d", position)

    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        position = _index_of(self._appointments, target)
        if any(
            i != position and a.is_same_appointment(edited)
            for i, a in enumerate(self._appointments)
        ):
            raise DuplicateRecordError("This appointment already exists in the clinic records.")

        appointments = list(self._appointments)
        appointments[position] = edited
        self._appointments = appointments
        logger.debug("Replaced appointment at position %d", position)

    def delete_patient(self, patient: Patient) -> list[Appointment]:
        position = _index_of(self._patients, patient)
        removed = [a for a in self._appointments if a.patient.is_same_patient(patient)]
        self._appointments = [
            a for a in self._appointments if not a.patient.is_same_patient(patient)
        ]
        self._patients = self._patients[:position] + self._patients[position + 1:]
        return removed

    def delete_appointment(self, appointment: Appointment) -> None:
        position = _index_of(self._appointments, appointment)
        self._appointments = self._appointments[:position] + self._appointments[position + 1:]

    def clear(self) -> None:
        self._patients = []
        self._appointments = []
        self._patient_filter = show_all
        self._appointment_filter = show_all
