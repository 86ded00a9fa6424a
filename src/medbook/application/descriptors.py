"""Edit descriptors: sparse patches naming only the fields a user wants to change.

Every slot starts as UNSET. A slot holding a value, even an empty one, is an
edit: ``tags=frozenset()`` clears all tags, ``tags=UNSET`` leaves them alone.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any

from medbook.domain import Patient


class _Unset:
    """Marker for a descriptor slot the user did not touch."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


@dataclass(frozen=True)
class PatientReference:
    """A patient named in a command line, not yet looked up in the store."""

    text: str

    def __post_init__(self):
        text = " ".join((self.text or "").split())
        if not text:
            raise ValueError("Patient reference must be non-empty.")
        object.__setattr__(self, "text", text)


class _Descriptor:
    """Shared behaviour for the edit descriptors below."""

    def __setattr__(self, name: str, value) -> None:
        # Snapshot tag collections so later changes to the caller's set don't leak in.
        if name == "tags" and value is not UNSET:
            value = frozenset(value)
        super().__setattr__(name, value)

    def is_any_field_edited(self) -> bool:
        return any(getattr(self, f.name) is not UNSET for f in fields(self))

    def edited_fields(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def value_or(self, name: str, default):
        value = getattr(self, name)
        return default if value is UNSET else value


@dataclass
class EditPatientDescriptor(_Descriptor):
    """Fields to overwrite on a patient."""

    name: str = UNSET
    phone: str = UNSET
    email: str = UNSET
    address: str = UNSET
    gender: str = UNSET
    birthdate: date = UNSET
    blood_type: str = UNSET
    remark: str = UNSET
    tags: frozenset[str] = UNSET


@dataclass
class EditAppointmentDescriptor(_Descriptor):
    """
    Fields to overwrite on an appointment.
    ``patient`` holds a PatientReference after parsing and a Patient once resolved.
    Completion and missed status are not editable here.
    """

    start: datetime = UNSET
    end: datetime = UNSET
    patient: PatientReference | Patient = UNSET
    description: str = UNSET
    tags: frozenset[str] = UNSET

    @property
    def needs_patient_resolution(self) -> bool:
        return isinstance(self.patient, PatientReference)
