"""Unit tests for the history ledger."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from doctrack.domain.entities import HistoryEntry
from doctrack.domain.exceptions import ValidationError
from doctrack.domain.services import append, seed_ledger
from doctrack.domain.value_objects import ADMIN_DEPARTMENT_NAME, SourceType

from tests.conftest import T0, make_document


# --- append ---


def test_same_minute_repeat_is_merged_and_note_backfilled() -> None:
    """Resubmitting a stage within the same minute keeps one entry."""
    doc = make_document()

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "Dept A", at=T0 + timedelta(seconds=30), note="resend")

    assert outcome.ledger_length == 1
    assert outcome.current_stage == "Dept A"
    assert doc.history[0].note == "resend"
    assert doc.history[0].at == T0


def test_merge_keeps_existing_note() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0, note="first")
    append(doc, "Dept A", at=T0 + timedelta(seconds=5), note="second")

    assert len(doc.history) == 1
    assert doc.history[0].note == "first"


def test_merge_uses_trimmed_stage() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "  Dept A ", at=T0)

    assert outcome.ledger_length == 1
    assert doc.history[0].stage == "Dept A"


def test_same_stage_next_minute_is_inserted() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "Dept A", at=T0 + timedelta(seconds=50))

    assert outcome.ledger_length == 2


def test_different_stage_is_inserted_and_becomes_current() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "Dept B", at=T0 + timedelta(hours=1))

    assert outcome.ledger_length == 2
    assert doc.current_stage == "Dept B"


def test_backdated_append_is_kept_in_append_order() -> None:
    """Last appended entry wins for the current stage, even when older."""
    doc = make_document()

    append(doc, "Dept A", at=T0)
    append(doc, "Dept B", at=T0 - timedelta(days=1))

    assert [e.stage for e in doc.history] == ["Dept A", "Dept B"]
    assert doc.current_stage == "Dept B"


def test_merge_into_older_entry_leaves_current_stage_on_last_entry() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0)
    append(doc, "Dept B", at=T0 + timedelta(hours=1))
    outcome = append(doc, "Dept A", at=T0 + timedelta(seconds=10), note="late")

    assert outcome.ledger_length == 2
    assert outcome.current_stage == "Dept B"
    assert doc.history[0].note == "late"


@pytest.mark.parametrize(
    "stages",
    [
        ["A"],
        ["A", "B", "A"],
        ["A", "A", "B", "B", "C"],
    ],
)
def test_current_stage_always_equals_last_entry(stages: list[str]) -> None:
    doc = make_document()
    for i, stage in enumerate(stages):
        append(doc, stage, at=T0 + timedelta(minutes=i % 2))
        assert doc.current_stage == doc.history[-1].stage


def test_timezones_are_compared_in_utc() -> None:
    doc = make_document()
    plus_seven = timezone(timedelta(hours=7))

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "Dept A", at=T0.astimezone(plus_seven) + timedelta(seconds=20))

    assert outcome.ledger_length == 1


def test_naive_timestamp_is_taken_as_utc() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0)
    outcome = append(doc, "Dept A", at=T0.replace(tzinfo=None))

    assert outcome.ledger_length == 1


def test_iso_string_timestamp_is_accepted() -> None:
    doc = make_document()

    append(doc, "Dept A", at="2026-03-02T09:15:00Z")

    assert doc.history[0].at == datetime(2026, 3, 2, 9, 15, tzinfo=UTC)


def test_missing_timestamp_defaults_to_now() -> None:
    doc = make_document()
    before = datetime.now(UTC)

    append(doc, "Dept A")

    assert before <= doc.history[0].at <= datetime.now(UTC)


def test_actor_dept_defaults_to_stage() -> None:
    doc = make_document()

    append(doc, "Dept A", at=T0, actor_role="admin")

    entry = doc.history[0]
    assert entry.actor_role == "admin"
    assert entry.actor_dept == "Dept A"


@pytest.mark.parametrize("stage", ["", "   ", None])
def test_empty_stage_is_rejected(stage) -> None:
    doc = make_document()

    with pytest.raises(ValidationError, match="stage is required"):
        append(doc, stage, at=T0)

    assert doc.history == []
    assert doc.current_stage == ""


@pytest.mark.parametrize("at", ["yesterday", "2026-13-40", 1700000000])
def test_malformed_timestamp_is_rejected(at) -> None:
    doc = make_document()

    with pytest.raises(ValidationError, match="Malformed timestamp"):
        append(doc, "Dept A", at=at)

    assert doc.history == []


# --- seed_ledger ---


def test_seed_incoming_document_with_department() -> None:
    doc = make_document(source_type=SourceType.INCOMING, department="Dept A")

    outcome = seed_ledger(doc)

    assert outcome is not None
    assert outcome.ledger_length == 1
    assert doc.current_stage == "Dept A"
    assert doc.history[0].at == T0


def test_seed_incoming_document_without_department_is_empty() -> None:
    doc = make_document(source_type=SourceType.INCOMING)

    assert seed_ledger(doc) is None
    assert doc.history == []
    assert doc.current_stage == ""


def test_seed_outgoing_document_follows_route_order() -> None:
    doc = make_document(
        source_type=SourceType.OUTGOING,
        from_dept="Planning",
        sent_date=T0,
        received_at_dept="Finance",
        received_date=T0 + timedelta(hours=2),
        to_dept="Legal",
        forwarded_date=T0 + timedelta(days=1),
        route_note="Dispatched",
    )

    outcome = seed_ledger(doc)

    assert outcome.ledger_length == 3
    assert [e.stage for e in doc.history] == ["Planning", "Finance", "Legal"]
    assert [e.note for e in doc.history] == ["Dispatched", None, None]
    assert all(e.actor_role == "system" for e in doc.history)
    assert all(e.actor_dept == "Planning" for e in doc.history)
    assert doc.current_stage == "Legal"


def test_seed_outgoing_document_skips_missing_steps() -> None:
    doc = make_document(source_type=SourceType.OUTGOING, to_dept="Legal")

    seed_ledger(doc)

    assert len(doc.history) == 1
    assert doc.history[0].stage == "Legal"
    assert doc.history[0].at == T0
    assert doc.history[0].actor_dept == ADMIN_DEPARTMENT_NAME


# --- serialization ---


def test_history_entry_record_round_trip_keeps_field_names() -> None:
    entry = HistoryEntry(stage="Dept A", at=T0, note="n", actor_role="admin", actor_dept="Ops")

    record = entry.to_record()

    assert set(record) == {"stage", "at", "note", "actorRole", "actorDept"}
    assert HistoryEntry.from_record(record) == entry
