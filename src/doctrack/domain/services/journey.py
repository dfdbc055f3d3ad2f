"""Journey reconstruction - display timeline derived from a document.

Pure functions: nothing here mutates the document or its ledger, and the
same document state always yields the same journey.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from doctrack.domain.entities import Document, HistoryEntry
from doctrack.domain.services.ledger import SYSTEM_ACTOR, as_utc

COMPLETED_NOTE = "Completed"


class JourneyEventType(StrEnum):
    CREATED = "created"
    STAGE_CHANGED = "stageChanged"
    COMPLETED = "completed"


@dataclass(frozen=True)
class JourneyEvent:
    """One step of the displayed document journey."""

    type: JourneyEventType
    stage: str
    at: datetime | None
    note: str
    actor: str


@dataclass(frozen=True)
class RouteStep:
    dept: str
    at: datetime | None


@dataclass(frozen=True)
class RouteSteps:
    """Three-step route summary: sent from, received at, forwarded to."""

    sent_from: RouteStep
    received_at: RouteStep
    forwarded_to: RouteStep


def format_actor(entry: HistoryEntry) -> str:
    """Human readable attribution of a ledger entry."""
    if entry.actor_dept and entry.actor_role:
        return f"{entry.actor_dept} ({entry.actor_role})"
    return entry.actor_dept or entry.actor_role or SYSTEM_ACTOR


def build_journey(document: Document, now: datetime | None = None) -> list[JourneyEvent]:
    """Build the ordered journey: created, one event per ledger entry, completed.

    ``now`` is only used as the completion time of a document completed
    without any timestamp to fall back on.
    """
    history = document.history
    first = history[0] if history else None
    last = history[-1] if history else None

    journey = [
        JourneyEvent(
            type=JourneyEventType.CREATED,
            stage=first.stage if first else (document.current_stage or document.department or ""),
            at=document.created_at or (first.at if first else None) or document.date,
            note=document.subject or "",
            actor=SYSTEM_ACTOR,
        )
    ]

    for entry in history:
        journey.append(
            JourneyEvent(
                type=JourneyEventType.STAGE_CHANGED,
                stage=entry.stage,
                at=entry.at,
                note=entry.note or "",
                actor=format_actor(entry),
            )
        )

    if document.is_completed:
        journey.append(
            JourneyEvent(
                type=JourneyEventType.COMPLETED,
                stage=document.current_stage,
                at=document.completed_at
                or (last.at if last else None)
                or document.updated_at
                or document.created_at
                or now
                or datetime.now(UTC),
                note=COMPLETED_NOTE,
                actor=SYSTEM_ACTOR,
            )
        )

    return journey


def compute_route_steps(document: Document) -> RouteSteps:
    """Summarize the route, preferring explicit document fields.

    Missing fields fall back to the ledger sorted by time: first entry for
    the sender, middle entry for the receiver, last entry for the target.
    """
    hist = sorted(document.history, key=lambda e: as_utc(e.at))
    first = hist[0] if hist else None
    middle = hist[len(hist) // 2] if hist else None
    last = hist[-1] if hist else None

    return RouteSteps(
        sent_from=RouteStep(
            dept=document.from_dept or (first.stage if first else ""),
            at=document.sent_date or document.date or (first.at if first else None),
        ),
        received_at=RouteStep(
            dept=document.received_at_dept or (middle.stage if middle else ""),
            at=document.received_date or (middle.at if middle else None),
        ),
        forwarded_to=RouteStep(
            dept=document.to_dept or (last.stage if last else ""),
            at=document.forwarded_date or (last.at if last else None),
        ),
    )
