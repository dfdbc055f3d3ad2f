"""Propose transition use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from doctrack.application.dto.transition_dto import TransitionInput, TransitionOutput
from doctrack.domain.entities import Document
from doctrack.domain.exceptions import Conflict, Forbidden, NotFound, ValidationError
from doctrack.domain.services import append, can_transition
from doctrack.domain.services.ledger import normalize_at
from doctrack.domain.value_objects import (
    CLOSED,
    LiteralStage,
    Principal,
    TransitionAction,
    parse_stage,
)

logger = logging.getLogger(__name__)


def _source_stage(document: Document, to_stage: str) -> str:
    """Stage the move is authorized from.

    A resubmitted move finds the document already in ``to_stage``; it is
    checked against the stage it came from so the ledger can absorb it.
    """
    history = document.history
    if to_stage == document.current_stage.strip() and len(history) >= 2:
        return history[-2].stage
    return document.current_stage


class ProposeTransitionUseCase:
    """Authorize a stage transition and record it in the document ledger.

    One call is one load-authorize-append-save cycle. A ``Conflict`` from
    the repository means another request saved the document first; the
    caller must rerun the whole cycle, nothing is retried here.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        principal: Principal,
        document_id: UUID,
        input_data: TransitionInput,
    ) -> TransitionOutput:
        """Move document to ``input_data.to_stage`` if the principal may."""
        to_stage = (input_data.to_stage or "").strip()
        if not to_stage:
            raise ValidationError("stage is required")
        try:
            action = TransitionAction(input_data.action)
        except ValueError as e:
            raise ValidationError(f"Unknown action: {input_data.action!r}") from e
        at = normalize_at(input_data.at)

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound("Document", document_id)

            from_stage = _source_stage(document, to_stage)
            if not can_transition(from_stage, to_stage, action, principal):
                logger.info(
                    "Refused %s of document %s from %r to %r for %s",
                    action,
                    document_id,
                    from_stage,
                    to_stage,
                    principal.role,
                )
                raise Forbidden(
                    f"Role {principal.role} cannot {action} from {from_stage!r} to {to_stage!r}"
                )

            outcome = append(
                document,
                to_stage,
                at=at,
                note=input_data.note,
                actor_role=principal.role.value,
                actor_dept=principal.department or None,
            )
            if action == TransitionAction.APPROVE and parse_stage(to_stage) == LiteralStage(CLOSED):
                document.mark_completed(at)
            document.updated_at = datetime.now(UTC)

            try:
                await uow.documents.update(document)
            except Conflict:
                logger.warning("Concurrent modification of document %s", document_id)
                raise

        logger.info(
            "Document %s moved %r -> %r (%d entries)",
            document_id,
            from_stage,
            outcome.current_stage,
            outcome.ledger_length,
        )
        return TransitionOutput(
            accepted=True,
            current_stage=outcome.current_stage,
            ledger_length=outcome.ledger_length,
        )
