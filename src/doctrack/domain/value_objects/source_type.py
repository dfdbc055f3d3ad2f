"""Direction of a logged document."""

from enum import StrEnum


class SourceType(StrEnum):
    """Incoming documents start in a department, outgoing ones follow a route."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
