"""Domain entities: Patient, AppointmentTime, and Appointment."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime

GENDERS = ("M", "F", "O")
BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

_NAME_RE = re.compile(r"^[\w][\w .'-]*$")
_EMAIL_RE = re.compile(r"^[\w.+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")
_TAG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")

DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _validate_tags(tags) -> frozenset[str]:
    tags = frozenset(tags)
    for tag in tags:
        if not _TAG_RE.match(tag):
            raise ValueError(f"Tag '{tag}' must be alphanumeric (hyphens allowed).")
    return tags


@dataclass(frozen=True)
class Patient:
    """
    A person registered with the clinic.
    Two patients are the same patient when their names match, ignoring case and spacing.
    """

    name: str
    phone: str
    email: str
    address: str
    gender: str
    birthdate: date
    blood_type: str
    remark: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        name = _collapse(self.name or "")
        if not name or not _NAME_RE.match(name):
            raise ValueError("Patient name must be non-empty and contain only letters, digits and spaces.")
        object.__setattr__(self, "name", name)

        if not (self.phone or "").strip():
            raise ValueError("Patient phone must be non-empty.")
        object.__setattr__(self, "phone", self.phone.strip())

        if not _EMAIL_RE.match((self.email or "").strip()):
            raise ValueError(f"Email '{self.email}' must be of the form local-part@domain.")
        object.__setattr__(self, "email", self.email.strip())

        if not (self.address or "").strip():
            raise ValueError("Patient address must be non-empty.")
        object.__setattr__(self, "address", self.address.strip())

        gender = (self.gender or "").strip().upper()
        if gender not in GENDERS:
            raise ValueError(f"Gender must be one of {', '.join(GENDERS)}.")
        object.__setattr__(self, "gender", gender)

        if self.birthdate > date.today():
            raise ValueError("Birthdate cannot be in the future.")

        blood_type = (self.blood_type or "").strip().upper()
        if blood_type not in BLOOD_TYPES:
            raise ValueError(f"Blood type must be one of {', '.join(BLOOD_TYPES)}.")
        object.__setattr__(self, "blood_type", blood_type)

        object.__setattr__(self, "remark", (self.remark or "").strip())
        object.__setattr__(self, "tags", _validate_tags(self.tags))

    def is_same_patient(self, other: "Patient | None") -> bool:
        """Identity check used for duplicate detection (weaker than ==)."""
        if other is None:
            return False
        return self.name.casefold() == other.name.casefold()

    def __str__(self) -> str:
        parts = [
            self.name,
            f"Phone: {self.phone}",
            f"Email: {self.email}",
            f"Address: {self.address}",
            f"Gender: {self.gender}",
            f"Birthdate: {self.birthdate.isoformat()}",
            f"Blood type: {self.blood_type}",
        ]
        if self.remark:
            parts.append(f"Remark: {self.remark}")
        if self.tags:
            parts.append("Tags: " + ", ".join(f"[{t}]" for t in sorted(self.tags)))
        return "; ".join(parts)


class InvalidTimeRangeError(ValueError):
    """Raised when an appointment does not end after it starts."""


@dataclass(frozen=True)
class AppointmentTime:
    """Start and end of an appointment, validated together."""

    start: datetime
    end: datetime

    def __post_init__(self):
        start = self.start.replace(second=0, microsecond=0)
        end = self.end.replace(second=0, microsecond=0)
        if end <= start:
            raise InvalidTimeRangeError(
                f"Appointment must end after it starts "
                f"(start {start.strftime(DATETIME_FORMAT)}, end {end.strftime(DATETIME_FORMAT)})."
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def __str__(self) -> str:
        return f"{self.start.strftime(DATETIME_FORMAT)} to {self.end.strftime(DATETIME_FORMAT)}"


@dataclass(frozen=True)
class Appointment:
    """
    A booked time slot for one patient.
    Two appointments are the same appointment when they share the time window and the patient.
    """

    time: AppointmentTime
    patient: Patient
    description: str
    tags: frozenset[str] = field(default_factory=frozenset)
    is_completed: bool = False
    is_missed: bool = False

    def __post_init__(self):
        if self.patient is None:
            raise ValueError("Appointment must have a patient.")
        description = (self.description or "").strip()
        if not description:
            raise ValueError("Appointment description must be non-empty.")
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "tags", _validate_tags(self.tags))
        if self.is_completed and self.is_missed:
            raise ValueError("Appointment cannot be both completed and missed.")

    @property
    def start(self) -> datetime:
        return self.time.start

    @property
    def end(self) -> datetime:
        return self.time.end

    def is_same_appointment(self, other: "Appointment | None") -> bool:
        """Identity check: same time window and same patient."""
        if other is None:
            return False
        return self.time == other.time and self.patient.is_same_patient(other.patient)

    @property
    def status(self) -> str:
        if self.is_completed:
            return "completed"
        if self.is_missed:
            return "missed"
        return "upcoming"

    def __str__(self) -> str:
        parts = [
            self.description,
            f"Time: {self.time}",
            f"Patient: {self.patient.name}",
            f"Status: {self.status}",
        ]
        if self.tags:
            parts.append("Tags: " + ", ".join(f"[{t}]" for t in sorted(self.tags)))
        return "; ".join(parts)
