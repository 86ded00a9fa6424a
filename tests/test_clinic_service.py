"""Tests for ClinicService and the console front end. Lines in, text out."""

import io

from medbook import create_service
from medbook.application import CommandFailed, CommandResult

from cli.__main__ import main, respond

ADD_ALICE = (
    "add n/Alice Tan p/9123 4567 e/alice@example.com a/1 Kent Ridge Rd "
    "g/F b/1990-05-17 bt/O+"
)
ADD_BOB = (
    "add n/Bob Lim p/+12025551234 e/bob@example.com a/2 Clementi Ave "
    "g/M b/1985-01-02 bt/A-"
)
BOOK_ALICE = "a-add s/2020-02-05 09:00 en/2020-02-05 10:00 pt/Alice Tan d/Check-up"
BOOK_BOB = "a-add s/2020-02-06 14:00 en/2020-02-06 15:00 pt/Bob Lim d/Blood test"


def _service():
    service = create_service(phone_region="SG")
    for line in (ADD_ALICE, ADD_BOB, BOOK_ALICE, BOOK_BOB):
        assert isinstance(service.run(line), CommandResult)
    return service


def test_edit_description_through_service() -> None:
    service = _service()
    result = service.run("a-edit 1 d/Therapy session")
    assert isinstance(result, CommandResult)
    assert "Therapy session" in result.feedback
    assert len(service.store.appointments()) == 2


def test_errors_become_failed_results() -> None:
    service = _service()
    before = service.store.appointments()

    for line, fragment in (
        ("a-edit 1", "At least one field to edit must be provided."),
        ("a-edit 0 d/x", "index provided is invalid"),
        ("a-edit 3 d/x", "index provided is invalid"),
        ("a-edit 1 pt/Carol Ng", "Carol Ng"),
        ("a-edit 1 s/2020-02-05 11:00", "end after it starts"),
        ("a-edit 1 s/2020-02-06 14:00 en/2020-02-06 15:00 pt/Bob Lim", "already exists"),
        ("bogus", "Unknown command"),
    ):
        result = service.run(line)
        assert isinstance(result, CommandFailed), line
        assert fragment in result.message, line

    assert service.store.appointments() == before


def test_bounds_error_takes_precedence_over_no_op() -> None:
    result = _service().run("a-edit 5")
    assert isinstance(result, CommandFailed)
    assert "index provided is invalid" in result.message


def test_respond_shows_filtered_lists() -> None:
    service = _service()
    text, should_exit = respond(service, "find bob")
    assert text.startswith("1 patient(s) listed!")
    assert "1. Bob Lim" in text
    assert not should_exit

    text, _ = respond(service, "a-find nothing")
    assert "(none)" in text

    text, should_exit = respond(service, "exit")
    assert should_exit


def test_main_reads_lines_until_exit(monkeypatch) -> None:
    monkeypatch.delenv("MEDBOOK_SEED_PATH", raising=False)
    monkeypatch.setenv("MEDBOOK_PHONE_REGION", "SG")
    stdin = io.StringIO("\n".join([ADD_ALICE, "list", "exit", "list"]) + "\n")
    stdout = io.StringIO()

    assert main(stdin=stdin, stdout=stdout) == 0

    out = stdout.getvalue()
    assert "New patient added: Alice Tan" in out
    assert "1. Alice Tan" in out
    assert out.rstrip().endswith("Goodbye.")


def test_main_exits_with_error_on_bad_settings(monkeypatch, caplog) -> None:
    monkeypatch.setenv("MEDBOOK_PHONE_REGION", "XX")
    stdout = io.StringIO()

    assert main(stdin=io.StringIO("list\n"), stdout=stdout) == 1

    assert stdout.getvalue() == ""
    assert "Invalid configuration" in caplog.text


def test_main_exits_with_error_on_bad_seed(monkeypatch, caplog, tmp_path) -> None:
    seed = tmp_path / "seed.yaml"
    seed.write_text("patients: not-a-list\n", encoding="utf-8")
    monkeypatch.setenv("MEDBOOK_PHONE_REGION", "SG")
    monkeypatch.setenv("MEDBOOK_SEED_PATH", str(seed))

    assert main(stdin=io.StringIO("list\n"), stdout=io.StringIO()) == 1
    assert "Could not load seed data" in caplog.text


def test_main_exits_with_error_on_missing_seed(monkeypatch, caplog, tmp_path) -> None:
    monkeypatch.setenv("MEDBOOK_PHONE_REGION", "SG")
    monkeypatch.setenv("MEDBOOK_SEED_PATH", str(tmp_path / "missing.yaml"))

    assert main(stdin=io.StringIO("list\n"), stdout=io.StringIO()) == 1
    assert "Could not load seed data" in caplog.text
