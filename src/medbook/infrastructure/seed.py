"""Load starting patients and appointments from a YAML file. Read-only: nothing is written back.

Expected shape::

    patients:
      - name: Alice Tan
        phone: "+6591234567"
        email: alice@example.com
        address: 1 Kent Ridge Rd
        gender: F
        birthdate: 1990-05-17
        blood_type: O+
        tags: [diabetic]
    appointments:
      - start: 2020-02-05 09:00
        end: 2020-02-05 10:00
        patient: Alice Tan
        description: Check-up
        completed: false
"""

import logging
from datetime import date, datetime
from pathlib import Path

import yaml

from medbook.application.ports import ClinicStore
from medbook.domain import DATETIME_FORMAT, Appointment, AppointmentTime, Patient
from medbook.infrastructure.phone import normalize_phone

logger = logging.getLogger(__name__)


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()


def _as_datetime(value) -> datetime:
    # YAML turns "2020-02-05 09:00" into a string but "2020-02-05 09:00:00" into a datetime.
    if isinstance(value, datetime):
        return value
    return datetime.strptime(" ".join(str(value).split()), DATETIME_FORMAT)


def _tags(entry: dict) -> frozenset[str]:
    tags = entry.get("tags")
    if tags is None:
        return frozenset()
    if not isinstance(tags, list):
        raise ValueError("Seed 'tags' must be a list")
    return frozenset(str(t) for t in tags)


def _flag(entry: dict, key: str) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"Seed '{key}' must be true or false, got {value!r}")
    return value


def _patient_from_dict(entry: dict, phone_region: str | None) -> Patient:
    raw_phone = str(entry.get("phone") or "")
    phone = normalize_phone(raw_phone, default_region=phone_region)
    if phone is None:
        raise ValueError(f"Patient {entry.get('name')!r} has an invalid phone number {raw_phone!r}")
    return Patient(
        name=str(entry.get("name") or ""),
        phone=phone,
        email=str(entry.get("email") or ""),
        address=str(entry.get("address") or ""),
        gender=str(entry.get("gender") or ""),
        birthdate=_as_date(entry.get("birthdate")),
        blood_type=str(entry.get("blood_type") or ""),
        remark=str(entry.get("remark") or ""),
        tags=_tags(entry),
    )


def _appointment_from_dict(entry: dict, patients: list[Patient]) -> Appointment:
    wanted = " ".join(str(entry.get("patient") or "").split()).casefold()
    patient = next((p for p in patients if p.name.casefold() == wanted), None)
    if patient is None:
        raise ValueError(f"Appointment references unknown patient {entry.get('patient')!r}")
    return Appointment(
        time=AppointmentTime(_as_datetime(entry.get("start")), _as_datetime(entry.get("end"))),
        patient=patient,
        description=str(entry.get("description") or ""),
        tags=_tags(entry),
        is_completed=_flag(entry, "completed"),
        is_missed=_flag(entry, "missed"),
    )


def load_seed(path: Path, store: ClinicStore, phone_region: str | None = None) -> tuple[int, int]:
    """Add the patients and appointments in path to store. Returns (patients, appointments) added.

    Every entry is built and checked before the store is touched, so a bad
    file adds nothing. Entries that repeat a stored or earlier record raise ValueError.
    """
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError("Seed YAML must be a mapping")
    patient_entries = data.get("patients") or []
    appointment_entries = data.get("appointments") or []
    if not isinstance(patient_entries, list) or not isinstance(appointment_entries, list):
        raise ValueError("Seed 'patients' and 'appointments' must be lists")

    known_patients = store.patients()
    patients: list[Patient] = []
    for entry in patient_entries:
        if not isinstance(entry, dict):
            raise ValueError("Every seed patient must be a mapping")
        patient = _patient_from_dict(entry, phone_region)
        if any(p.is_same_patient(patient) for p in known_patients):
            raise ValueError(f"Seed patient {patient.name!r} is listed more than once")
        patients.append(patient)
        known_patients.append(patient)

    known_appointments = store.appointments()
    appointments: list[Appointment] = []
    for entry in appointment_entries:
        if not isinstance(entry, dict):
            raise ValueError("Every seed appointment must be a mapping")
        appointment = _appointment_from_dict(entry, known_patients)
        if any(a.is_same_appointment(appointment) for a in known_appointments):
            raise ValueError(
                f"Seed appointment for {appointment.patient.name!r} at {appointment.time} "
                "is listed more than once"
            )
        appointments.append(appointment)
        known_appointments.append(appointment)

    for patient in patients:
        store.add_patient(patient)
    for appointment in appointments:
        store.add_appointment(appointment)

    logger.info("Loaded %d patient(s) and %d appointment(s) from %s", len(patients), len(appointments), path)
    return len(patients), len(appointments)
