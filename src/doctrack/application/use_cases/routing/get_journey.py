"""Get journey use case."""

from uuid import UUID

from doctrack.application.dto.transition_dto import JourneyOutput
from doctrack.domain.exceptions import NotFound
from doctrack.domain.services import build_journey, compute_route_steps


class GetJourneyUseCase:
    """Reconstruct the display journey of a document. Read-only."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> JourneyOutput:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound("Document", document_id)

        return JourneyOutput(
            document_id=document.id,
            subject=document.subject,
            date=document.date,
            current_stage=document.current_stage,
            status=document.status,
            journey=build_journey(document),
            route=compute_route_steps(document),
        )
