"""Actions that move a document between stages."""

from enum import StrEnum


class TransitionAction(StrEnum):
    """Kind of move requested for a document."""

    FORWARD = "FORWARD"
    RETURN = "RETURN"
    APPROVE = "APPROVE"
