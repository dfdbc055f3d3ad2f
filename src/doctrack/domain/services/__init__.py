"""Domain services: ledger, journey and transition authorization."""

from doctrack.domain.services.authorization import (
    TRANSITIONS,
    StageToken,
    TransitionRule,
    allowed_targets,
    can_transition,
)
from doctrack.domain.services.journey import (
    JourneyEvent,
    JourneyEventType,
    RouteStep,
    RouteSteps,
    build_journey,
    compute_route_steps,
)
from doctrack.domain.services.ledger import EntryOutcome, append, seed_ledger

__all__ = [
    "TRANSITIONS",
    "EntryOutcome",
    "JourneyEvent",
    "JourneyEventType",
    "RouteStep",
    "RouteSteps",
    "StageToken",
    "TransitionRule",
    "allowed_targets",
    "append",
    "build_journey",
    "can_transition",
    "compute_route_steps",
    "seed_ledger",
]
