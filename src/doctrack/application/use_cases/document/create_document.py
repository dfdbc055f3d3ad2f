"""Create document use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from doctrack.application.dto.document_dto import DocumentCreateInput, DocumentOutput
from doctrack.domain.entities import Document
from doctrack.domain.exceptions import ValidationError
from doctrack.domain.services import seed_ledger

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class CreateDocumentUseCase:
    """Log a new document and seed its ledger from the registration fields."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, input_data: DocumentCreateInput) -> DocumentOutput:
        """Create document."""
        subject = (input_data.subject or "").strip()
        if not subject:
            raise ValidationError("subject is required")

        now = datetime.now(UTC)
        document = Document(
            id=uuid4(),
            subject=subject,
            source_type=input_data.source_type,
            organization=(input_data.organization or "").strip(),
            date=input_data.date,
            department=_clean(input_data.department),
            from_dept=_clean(input_data.from_dept),
            sent_date=input_data.sent_date,
            received_at_dept=_clean(input_data.received_at_dept),
            received_date=input_data.received_date,
            to_dept=_clean(input_data.to_dept),
            forwarded_date=input_data.forwarded_date,
            route_note=_clean(input_data.route_note),
            created_at=now,
            updated_at=now,
        )
        seed_ledger(document)

        async with self._uow_factory() as uow:
            await uow.documents.create(document)

        logger.info("Created %s document %s", document.source_type, document.id)
        return DocumentOutput.from_entity(document)
