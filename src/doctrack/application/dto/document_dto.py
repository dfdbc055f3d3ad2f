"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from doctrack.domain.entities import Document, HistoryEntry
from doctrack.domain.value_objects import DocumentStatus, SourceType


@dataclass
class DocumentCreateInput:
    """Input for logging a new document."""

    subject: str
    source_type: SourceType = SourceType.INCOMING
    organization: str = ""
    date: datetime | None = None
    department: str | None = None
    from_dept: str | None = None
    sent_date: datetime | None = None
    received_at_dept: str | None = None
    received_date: datetime | None = None
    to_dept: str | None = None
    forwarded_date: datetime | None = None
    route_note: str | None = None


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    subject: str
    organization: str
    source_type: SourceType
    date: datetime | None
    department: str | None
    current_stage: str
    status: DocumentStatus
    completed_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    version: int
    history: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentOutput":
        return cls(
            id=document.id,
            subject=document.subject,
            organization=document.organization,
            source_type=document.source_type,
            date=document.date,
            department=document.department,
            current_stage=document.current_stage,
            status=document.status,
            completed_at=document.completed_at,
            created_at=document.created_at,
            updated_at=document.updated_at,
            version=document.version,
            history=list(document.history),
        )
