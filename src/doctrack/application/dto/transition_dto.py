"""Transition and journey DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doctrack.domain.services import JourneyEvent, RouteSteps
from doctrack.domain.value_objects import DocumentStatus, TransitionAction


@dataclass
class TransitionInput:
    """Requested move of a document to ``to_stage``."""

    to_stage: str
    action: TransitionAction
    note: str | None = None
    at: datetime | str | None = None


@dataclass
class TransitionOutput:
    accepted: bool
    current_stage: str
    ledger_length: int


@dataclass
class JourneyOutput:
    """Display timeline of a document."""

    document_id: UUID
    subject: str
    date: datetime | None
    current_stage: str
    status: DocumentStatus
    journey: list[JourneyEvent]
    route: RouteSteps
