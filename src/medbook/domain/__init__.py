"""Domain layer: entities and value objects. No dependencies on outer layers."""

from medbook.domain.entities import (
    BLOOD_TYPES,
    DATETIME_FORMAT,
    GENDERS,
    Appointment,
    AppointmentTime,
    InvalidTimeRangeError,
    Patient,
)

__all__ = [
    "BLOOD_TYPES",
    "DATETIME_FORMAT",
    "GENDERS",
    "Appointment",
    "AppointmentTime",
    "InvalidTimeRangeError",
    "Patient",
]
