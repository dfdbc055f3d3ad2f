"""Document aggregate."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from doctrack.domain.entities.history_entry import HistoryEntry
from doctrack.domain.value_objects import DocumentStatus, SourceType


@dataclass
class Document:
    """Logged office document with its routing ledger.

    ``current_stage`` and ``history`` are changed only through the ledger
    service; ``version`` is bumped by the repository on every save and used
    to detect concurrent modification.
    """

    id: UUID
    subject: str
    source_type: SourceType = SourceType.INCOMING
    organization: str = ""
    date: datetime | None = None
    department: str | None = None

    # Three-step outgoing route
    from_dept: str | None = None
    sent_date: datetime | None = None
    received_at_dept: str | None = None
    received_date: datetime | None = None
    to_dept: str | None = None
    forwarded_date: datetime | None = None
    route_note: str | None = None

    current_stage: str = ""
    status: DocumentStatus = DocumentStatus.IN_PROGRESS
    completed_at: datetime | None = None
    history: list[HistoryEntry] = field(default_factory=list)

    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    @property
    def is_completed(self) -> bool:
        return self.status == DocumentStatus.COMPLETED or self.completed_at is not None

    def mark_completed(self, at: datetime) -> None:
        """Close the document; the first completion time is kept."""
        self.status = DocumentStatus.COMPLETED
        if self.completed_at is None:
            self.completed_at = at
