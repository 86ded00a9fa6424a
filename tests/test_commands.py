"""Unit tests for add, delete, find, list, mark, clear, help and exit commands."""

from datetime import date, datetime

import pytest

from medbook.application import (
    AddAppointmentCommand,
    AddPatientCommand,
    AppointmentContainsKeywords,
    ClearCommand,
    DeleteAppointmentCommand,
    DeletePatientCommand,
    DuplicateRecordError,
    ExitCommand,
    FindAppointmentCommand,
    FindPatientCommand,
    HelpCommand,
    IndexOutOfRangeError,
    InvalidValueError,
    ListAppointmentsCommand,
    ListPatientsCommand,
    MarkAppointmentCommand,
    NameContainsKeywords,
    PatientReference,
    ReferenceResolutionError,
)
from medbook.domain import Patient
from medbook.infrastructure import InMemoryClinicStore


def _patient(name: str = "Alice Tan") -> Patient:
    return Patient(
        name=name,
        phone="+6591234567",
        email="someone@example.com",
        address="1 Kent Ridge Rd",
        gender="F",
        birthdate=date(1990, 5, 17),
        blood_type="O+",
    )


def _book(store: InMemoryClinicStore, patient: str, hour: int, description: str = "Check-up") -> None:
    AddAppointmentCommand(
        start=datetime(2020, 2, 5, hour, 0),
        end=datetime(2020, 2, 5, hour + 1, 0),
        patient=PatientReference(patient),
        description=description,
    ).execute(store)


def _store() -> InMemoryClinicStore:
    store = InMemoryClinicStore()
    AddPatientCommand(_patient("Alice Tan")).execute(store)
    AddPatientCommand(_patient("Bob Lim")).execute(store)
    _book(store, "Alice Tan", 9)
    _book(store, "Bob Lim", 11, "Blood test")
    _book(store, "alice tan", 14, "Physiotherapy")
    return store


def test_add_patient() -> None:
    store = InMemoryClinicStore()
    result = AddPatientCommand(_patient()).execute(store)
    assert result.feedback.startswith("New patient added: Alice Tan")
    assert store.patients() == [_patient()]


def test_add_duplicate_patient_rejected() -> None:
    store = InMemoryClinicStore()
    AddPatientCommand(_patient("Alice Tan")).execute(store)
    with pytest.raises(DuplicateRecordError):
        AddPatientCommand(_patient("alice  TAN")).execute(store)
    assert len(store.patients()) == 1


def test_add_appointment_resolves_patient() -> None:
    store = _store()
    appointments = store.appointments()
    assert len(appointments) == 3
    assert appointments[2].patient == _patient("Alice Tan")


def test_add_appointment_unknown_patient() -> None:
    store = _store()
    with pytest.raises(ReferenceResolutionError):
        _book(store, "Carol Ng", 16)
    assert len(store.appointments()) == 3


def test_add_appointment_same_slot_same_patient_is_duplicate() -> None:
    store = _store()
    with pytest.raises(DuplicateRecordError):
        _book(store, "Alice Tan", 9, "Different description")


def test_add_appointment_inverted_range() -> None:
    store = _store()
    with pytest.raises(InvalidValueError):
        AddAppointmentCommand(
            start=datetime(2020, 2, 5, 10, 0),
            end=datetime(2020, 2, 5, 9, 0),
            patient=PatientReference("Alice Tan"),
            description="Check-up",
        ).execute(store)


def test_delete_patient_removes_their_appointments() -> None:
    store = _store()
    result = DeletePatientCommand(1).execute(store)
    assert "Alice Tan" in result.feedback
    assert "2 appointment(s)" in result.feedback
    assert [p.name for p in store.patients()] == ["Bob Lim"]
    assert [a.description for a in store.appointments()] == ["Blood test"]


def test_delete_patient_index_out_of_range() -> None:
    store = _store()
    with pytest.raises(IndexOutOfRangeError):
        DeletePatientCommand(3).execute(store)


def test_delete_appointment_uses_filtered_view() -> None:
    store = _store()
    FindAppointmentCommand(AppointmentContainsKeywords(("physiotherapy",))).execute(store)
    DeleteAppointmentCommand(1).execute(store)
    assert [a.description for a in store.appointments()] == ["Check-up", "Blood test"]


def test_find_and_list_patients() -> None:
    store = _store()
    result = FindPatientCommand(NameContainsKeywords(("BOB", "nobody"))).execute(store)
    assert result.feedback == "1 patient(s) listed!"
    assert [p.name for p in store.filtered_patients()] == ["Bob Lim"]

    ListPatientsCommand().execute(store)
    assert len(store.filtered_patients()) == 2


def test_find_patients_matches_whole_words_only() -> None:
    store = _store()
    FindPatientCommand(NameContainsKeywords(("Ali",))).execute(store)
    assert store.filtered_patients() == []


def test_find_and_list_appointments() -> None:
    store = _store()
    result = FindAppointmentCommand(AppointmentContainsKeywords(("alice",))).execute(store)
    assert result.feedback == "2 appointment(s) listed!"

    ListAppointmentsCommand().execute(store)
    assert len(store.filtered_appointments()) == 3


def test_mark_completed_then_missed() -> None:
    store = _store()
    MarkAppointmentCommand(2, "completed").execute(store)
    marked = store.appointments()[1]
    assert marked.is_completed and not marked.is_missed

    result = MarkAppointmentCommand(2, "missed").execute(store)
    marked = store.appointments()[1]
    assert marked.is_missed and not marked.is_completed
    assert "missed" in result.feedback


def test_mark_rejects_unknown_status() -> None:
    with pytest.raises(ValueError):
        MarkAppointmentCommand(1, "cancelled")


def test_clear_help_exit() -> None:
    store = _store()
    ClearCommand().execute(store)
    assert store.patients() == []
    assert store.appointments() == []

    help_result = HelpCommand("usage text").execute(store)
    assert help_result.show_help
    assert help_result.feedback == "usage text"

    assert ExitCommand().execute(store).exit
