"""Document processing status."""

from enum import StrEnum


class DocumentStatus(StrEnum):
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
