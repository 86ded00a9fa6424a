"""Unit tests for InMemoryClinicStore."""

import dataclasses
from datetime import date, datetime

import pytest

from medbook.application import DuplicateRecordError, NameContainsKeywords
from medbook.domain import Appointment, AppointmentTime, Patient
from medbook.infrastructure import InMemoryClinicStore


def _patient(name: str) -> Patient:
    return Patient(
        name=name,
        phone="+6591234567",
        email="someone@example.com",
        address="1 Kent Ridge Rd",
        gender="O",
        birthdate=date(2000, 1, 1),
        blood_type="B+",
    )


def _appointment(patient: Patient, hour: int) -> Appointment:
    return Appointment(
        time=AppointmentTime(datetime(2021, 3, 1, hour, 0), datetime(2021, 3, 1, hour, 30)),
        patient=patient,
        description="Consultation",
    )


def test_insertion_order_preserved() -> None:
    store = InMemoryClinicStore()
    for name in ("Carol Ng", "Alice Tan", "Bob Lim"):
        store.add_patient(_patient(name))
    assert [p.name for p in store.patients()] == ["Carol Ng", "Alice Tan", "Bob Lim"]


def test_returned_lists_are_copies() -> None:
    store = InMemoryClinicStore()
    store.add_patient(_patient("Alice Tan"))
    store.patients().clear()
    store.filtered_patients().clear()
    assert len(store.patients()) == 1


def test_store_rejects_duplicate_identity() -> None:
    store = InMemoryClinicStore()
    alice = _patient("Alice Tan")
    store.add_patient(alice)
    with pytest.raises(DuplicateRecordError):
        store.add_patient(_patient("ALICE TAN"))

    store.add_appointment(_appointment(alice, 9))
    with pytest.raises(DuplicateRecordError):
        store.add_appointment(_appointment(alice, 9))


def test_appointment_needs_stored_patient() -> None:
    store = InMemoryClinicStore()
    with pytest.raises(LookupError):
        store.add_appointment(_appointment(_patient("Ghost"), 9))


def test_set_appointment_replaces_in_place() -> None:
    store = InMemoryClinicStore()
    alice = _patient("Alice Tan")
    store.add_patient(alice)
    first, second = _appointment(alice, 9), _appointment(alice, 10)
    store.add_appointment(first)
    store.add_appointment(second)

    edited = dataclasses.replace(first, description="Dental")
    store.set_appointment(first, edited)
    assert store.appointments() == [edited, second]


def test_set_appointment_refuses_collision() -> None:
    store = InMemoryClinicStore()
    alice = _patient("Alice Tan")
    store.add_patient(alice)
    first, second = _appointment(alice, 9), _appointment(alice, 10)
    store.add_appointment(first)
    store.add_appointment(second)

    with pytest.raises(DuplicateRecordError):
        store.set_appointment(first, dataclasses.replace(second, description="Other"))
    assert store.appointments() == [first, second]


def test_set_unknown_record_raises() -> None:
    store = InMemoryClinicStore()
    with pytest.raises(LookupError):
        store.set_patient(_patient("Alice Tan"), _patient("Bob Lim"))


def test_set_patient_cascades_to_appointments() -> None:
    store = InMemoryClinicStore()
    alice, bob = _patient("Alice Tan"), _patient("Bob Lim")
    store.add_patient(alice)
    store.add_patient(bob)
    store.add_appointment(_appointment(alice, 9))
    store.add_appointment(_appointment(bob, 10))

    renamed = dataclasses.replace(alice, name="Alice Wong")
    store.set_patient(alice, renamed)
    assert store.appointments()[0].patient == renamed
    assert store.appointments()[1].patient == bob


def test_delete_patient_returns_removed_appointments() -> None:
    store = InMemoryClinicStore()
    alice, bob = _patient("Alice Tan"), _patient("Bob Lim")
    store.add_patient(alice)
    store.add_patient(bob)
    store.add_appointment(_appointment(alice, 9))
    store.add_appointment(_appointment(bob, 10))

    removed = store.delete_patient(alice)
    assert [a.patient for a in removed] == [alice]
    assert store.patients() == [bob]
    assert len(store.appointments()) == 1


def test_filters_and_clear() -> None:
    store = InMemoryClinicStore()
    store.add_patient(_patient("Alice Tan"))
    store.add_patient(_patient("Bob Lim"))
    store.update_patient_filter(NameContainsKeywords(("bob",)))
    assert [p.name for p in store.filtered_patients()] == ["Bob Lim"]

    store.clear()
    assert store.patients() == []
    store.add_patient(_patient("Carol Ng"))
    assert len(store.filtered_patients()) == 1


def test_find_patient_by_name() -> None:
    store = InMemoryClinicStore()
    alice = _patient("Alice Tan")
    store.add_patient(alice)
    assert store.find_patient_by_name("  alice   TAN ") is alice
    assert store.find_patient_by_name("Alice") is None
    assert store.find_patient_by_name("") is None
