"""Merging edit descriptors into records, and the duplicate guard.

Nothing here mutates its inputs or the store. Commands call these and decide
whether to commit.
"""

import dataclasses
from collections.abc import Callable, Iterable
from typing import TypeVar

from medbook.application.descriptors import (
    EditAppointmentDescriptor,
    EditPatientDescriptor,
    PatientReference,
)
from medbook.application.errors import ReferenceResolutionError
from medbook.application.ports import ClinicStore
from medbook.domain import Appointment, AppointmentTime, Patient

R = TypeVar("R")


def resolve_patient_reference(reference: PatientReference | Patient, store: ClinicStore) -> Patient:
    """Look up the patient a reference names. Patients pass through untouched."""
    if isinstance(reference, Patient):
        return reference
    patient = store.find_patient_by_name(reference.text)
    if patient is None:
        raise ReferenceResolutionError(reference.text)
    return patient


def resolve_patient(
    descriptor: EditAppointmentDescriptor, store: ClinicStore
) -> EditAppointmentDescriptor:
    """Return a copy of descriptor whose patient slot holds a stored Patient."""
    if not descriptor.needs_patient_resolution:
        return descriptor
    return dataclasses.replace(
        descriptor, patient=resolve_patient_reference(descriptor.patient, store)
    )


def apply_patient_edit(existing: Patient, descriptor: EditPatientDescriptor) -> Patient:
    """Build a new Patient: descriptor values where present, existing values elsewhere."""
    return Patient(
        name=descriptor.value_or("name", existing.name),
        phone=descriptor.value_or("phone", existing.phone),
        email=descriptor.value_or("email", existing.email),
        address=descriptor.value_or("address", existing.address),
        gender=descriptor.value_or("gender", existing.gender),
        birthdate=descriptor.value_or("birthdate", existing.birthdate),
        blood_type=descriptor.value_or("blood_type", existing.blood_type),
        remark=descriptor.value_or("remark", existing.remark),
        tags=descriptor.value_or("tags", existing.tags),
    )


def apply_appointment_edit(
    existing: Appointment,
    descriptor: EditAppointmentDescriptor,
    store: ClinicStore,
) -> Appointment:
    """
    Build a new Appointment from existing and descriptor.

    Start and end are recombined into a fresh AppointmentTime, so a lone new
    start is still checked against the existing end. Completion and missed
    status always come from existing.
    """
    descriptor = resolve_patient(descriptor, store)
    time = AppointmentTime(
        start=descriptor.value_or("start", existing.start),
        end=descriptor.value_or("end", existing.end),
    )
    return Appointment(
        time=time,
        patient=descriptor.value_or("patient", existing.patient),
        description=descriptor.value_or("description", existing.description),
        tags=descriptor.value_or("tags", existing.tags),
        is_completed=existing.is_completed,
        is_missed=existing.is_missed,
    )


def find_collision(
    candidate: R,
    records: Iterable[R],
    same_identity: Callable[[R, R], bool],
    replacing: R | None = None,
) -> R | None:
    """
    Return the first stored record, other than the one being replaced, that has
    the candidate's identity. None when there is no collision.
    """
    for record in records:
        if record is replacing:
            continue
        if same_identity(record, candidate):
            return record
    return None


def find_patient_collision(
    candidate: Patient, store: ClinicStore, replacing: Patient | None = None
) -> Patient | None:
    return find_collision(candidate, store.patients(), Patient.is_same_patient, replacing)


def find_appointment_collision(
    candidate: Appointment, store: ClinicStore, replacing: Appointment | None = None
) -> Appointment | None:
    return find_collision(
        candidate, store.appointments(), Appointment.is_same_appointment, replacing
    )
