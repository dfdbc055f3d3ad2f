"""History ledger - append-mostly log of stage transitions.

Entries keep append order; ``at`` may be backdated by the caller, so the
ledger is not necessarily sorted by time. Two entries never share the key
``(stage trimmed, at floored to the minute)``: an append that hits an
existing key is merged into that entry instead of inserted.

Appends are read-modify-write over the whole ledger. Callers must load the
aggregate, append once and persist with a version check (see
``DocumentRepository.update``) so that concurrent appends on the same
document cannot interleave.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from doctrack.domain.entities import Document, HistoryEntry
from doctrack.domain.exceptions import ValidationError
from doctrack.domain.value_objects import ADMIN_DEPARTMENT_NAME, SourceType

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


@dataclass(frozen=True)
class EntryOutcome:
    """Result of an append, merged or inserted alike."""

    current_stage: str
    ledger_length: int


def as_utc(at: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if at.tzinfo is None:
        return at.replace(tzinfo=UTC)
    return at.astimezone(UTC)


def normalize_at(at: datetime | str | None) -> datetime:
    """Coerce a caller supplied timestamp; None means now."""
    if at is None:
        return datetime.now(UTC)
    if isinstance(at, str):
        try:
            at = datetime.fromisoformat(at.strip())
        except ValueError as e:
            raise ValidationError(f"Malformed timestamp: {at!r}") from e
    elif not isinstance(at, datetime):
        raise ValidationError(f"Malformed timestamp: {at!r}")
    return as_utc(at)


def dedup_key(stage: str, at: datetime) -> tuple[str, datetime]:
    return stage.strip(), as_utc(at).replace(second=0, microsecond=0)


def append(
    document: Document,
    stage: str,
    at: datetime | str | None = None,
    note: str | None = None,
    actor_role: str | None = None,
    actor_dept: str | None = None,
) -> EntryOutcome:
    """Record a move of ``document`` into ``stage``.

    A same-minute repeat of a stage is merged into the existing entry; its
    note is backfilled when it had none. ``current_stage`` always follows the
    last ledger entry.
    """
    name = stage.strip() if isinstance(stage, str) else ""
    if not name:
        raise ValidationError("stage is required")
    when = normalize_at(at)
    key = dedup_key(name, when)

    existing = next(
        (e for e in document.history if dedup_key(e.stage, e.at) == key),
        None,
    )
    if existing is not None:
        if not existing.note and note:
            existing.note = note
        logger.debug(
            "Merged repeated transition into %r at %s for document %s",
            name,
            key[1].isoformat(),
            document.id,
        )
    else:
        document.history.append(
            HistoryEntry(
                stage=name,
                at=when,
                note=note or None,
                actor_role=actor_role,
                actor_dept=actor_dept or name,
            )
        )

    document.current_stage = document.history[-1].stage
    return EntryOutcome(
        current_stage=document.current_stage,
        ledger_length=len(document.history),
    )


def seed_ledger(document: Document) -> EntryOutcome | None:
    """Seed the ledger of a newly created document from its own fields.

    Incoming documents start in their department. Outgoing documents get one
    entry per recorded route step (from, received at, forwarded to).
    Returns None when there is nothing to seed.
    """
    created = document.created_at or datetime.now(UTC)
    outcome: EntryOutcome | None = None

    if document.source_type == SourceType.INCOMING:
        if document.department and document.department.strip():
            outcome = append(document, document.department, at=created)
    else:
        actor_dept = document.from_dept or ADMIN_DEPARTMENT_NAME
        note = document.route_note
        route = (
            (document.from_dept, document.sent_date),
            (document.received_at_dept, document.received_date),
            (document.to_dept, document.forwarded_date),
        )
        for dept, when in route:
            if not dept or not dept.strip():
                continue
            outcome = append(
                document,
                dept,
                at=when or created,
                note=note,
                actor_role=SYSTEM_ACTOR,
                actor_dept=actor_dept,
            )
            note = None

    if outcome is not None:
        logger.info(
            "Seeded ledger of document %s with %d entries",
            document.id,
            outcome.ledger_length,
        )
    return outcome
