"""Routing API resources: stage transitions and journey."""

from datetime import datetime
from uuid import UUID

import falcon.asgi

from doctrack.application.dto.transition_dto import JourneyOutput, TransitionInput
from doctrack.application.use_cases.routing.get_journey import GetJourneyUseCase
from doctrack.application.use_cases.routing.propose_transition import (
    ProposeTransitionUseCase,
)
from doctrack.domain.exceptions import Conflict, Forbidden, NotFound, ValidationError
from doctrack.domain.services import RouteStep
from doctrack.interfaces.api.resources.documents import text_field


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_id(document_id: str, resp: falcon.asgi.Response) -> UUID | None:
    try:
        return UUID(document_id)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": "Invalid id"}
        return None


class DocumentStageResource:
    """PUT /v1/documents/{id}/stage - propose a stage transition."""

    def __init__(self, propose_transition: ProposeTransitionUseCase) -> None:
        self._propose_transition = propose_transition

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Body: {"stage", "action", "note"?, "at"?}."""
        principal = getattr(req.context, "principal", None)
        if not principal:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        doc_id = _parse_id(document_id, resp)
        if doc_id is None:
            return

        body = await req.get_media(default_when_empty=None)
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "JSON object body required"}
            return

        stage = body.get("stage")
        try:
            input_data = TransitionInput(
                to_stage=stage if isinstance(stage, str) else "",
                action=body.get("action") or "",
                note=text_field(body, "note") or None,
                at=body.get("at") or None,
            )
            result = await self._propose_transition.execute(principal, doc_id, input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except Forbidden as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Forbidden", "detail": str(e)}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return
        except Conflict:
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Document was modified concurrently, retry"}
            return

        resp.media = {
            "accepted": result.accepted,
            "currentStage": result.current_stage,
            "ledgerLength": result.ledger_length,
        }
        resp.status = falcon.HTTP_200


class JourneyResource:
    """GET /v1/documents/{id}/journey - display timeline."""

    def __init__(self, get_journey: GetJourneyUseCase) -> None:
        self._get_journey = get_journey

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        principal = getattr(req.context, "principal", None)
        if not principal:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        doc_id = _parse_id(document_id, resp)
        if doc_id is None:
            return

        try:
            result = await self._get_journey.execute(doc_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.media = journey_to_dict(result)
        resp.status = falcon.HTTP_200


def _step_to_dict(step: RouteStep) -> dict:
    return {"dept": step.dept, "at": _iso(step.at)}


def journey_to_dict(j: JourneyOutput) -> dict:
    return {
        "id": str(j.document_id),
        "subject": j.subject,
        "date": _iso(j.date),
        "currentStage": j.current_stage,
        "status": j.status.value,
        "journey": [
            {
                "type": e.type.value,
                "stage": e.stage,
                "note": e.note,
                "at": _iso(e.at),
                "actor": e.actor,
            }
            for e in j.journey
        ],
        "route": {
            "from": _step_to_dict(j.route.sent_from),
            "received": _step_to_dict(j.route.received_at),
            "to": _step_to_dict(j.route.forwarded_to),
        },
    }
