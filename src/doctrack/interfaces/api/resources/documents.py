"""Document API resources."""

from datetime import datetime
from uuid import UUID

import falcon.asgi

from doctrack.application.dto.document_dto import DocumentCreateInput, DocumentOutput
from doctrack.application.use_cases.document.create_document import CreateDocumentUseCase
from doctrack.application.use_cases.document.get_document import GetDocumentUseCase
from doctrack.domain.exceptions import NotFound, ValidationError
from doctrack.domain.value_objects import SourceType


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_datetime(value: object, field: str) -> datetime | None:
    """Parse an optional ISO-8601 body field."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 string")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise ValidationError(f"{field} is not a valid date: {value!r}") from e


def text_field(body: dict, key: str) -> str | None:
    """Optional string body field; other JSON types are rejected."""
    """Optional string body field; other JSON types are rejected."""
    value = body.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"{key} must be a string")


def _parse_create_body(body: dict) -> DocumentCreateInput:
    try:
        source_type = SourceType(body.get("sourceType") or SourceType.INCOMING)
    except ValueError as e:
        raise ValidationError(f"Unknown sourceType: {body.get('sourceType')!r}") from e
    return DocumentCreateInput(
        subject=text_field(body, "subject") or "",
        source_type=source_type,
        organization=text_field(body, "organization") or "",
        date=parse_datetime(body.get("date"), "date"),
        department=text_field(body, "department"),
        from_dept=text_field(body, "fromDept"),
        sent_date=parse_datetime(body.get("sentDate"), "sentDate"),
        received_at_dept=text_field(body, "receivedAt"),
        received_date=parse_datetime(body.get("receivedDate"), "receivedDate"),
        to_dept=text_field(body, "toDept"),
        forwarded_date=parse_datetime(body.get("forwardedDate"), "forwardedDate"),
        route_note=text_field(body, "routeNote"),
    )


class DocumentsResource:
    """POST /v1/documents - log a new document."""

    def __init__(self, create_document: CreateDocumentUseCase) -> None:
        self._create_document = create_document

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create document and seed its ledger."""
        principal = getattr(req.context, "principal", None)
        if not principal:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media(default_when_empty=None)
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "JSON object body required"}
            return

        try:
            result = await self._create_document.execute(_parse_create_body(body))
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = document_to_dict(result)
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET /v1/documents/{id} - get document with its ledger."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

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

        try:
            doc_id = UUID(document_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid id"}
            return

        try:
            result = await self._get_document.execute(doc_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.media = document_to_dict(result)
        resp.status = falcon.HTTP_200


def document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "subject": d.subject,
        "organization": d.organization,
        "sourceType": d.source_type.value,
        "date": _iso(d.date),
        "department": d.department,
        "currentStage": d.current_stage,
        "status": d.status.value,
        "completedAt": _iso(d.completed_at),
        "history": [entry.to_record() for entry in d.history],
        "createdAt": _iso(d.created_at),
        "updatedAt": _iso(d.updated_at),
        "version": d.version,
    }
