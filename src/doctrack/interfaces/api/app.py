"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from doctrack.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from doctrack.interfaces.api.resources.health import HealthResource
from doctrack.interfaces.api.resources.routing import DocumentStageResource, JourneyResource

logger = logging.getLogger(__name__)


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log unhandled errors and answer 500 without leaking details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    stage_resource: DocumentStageResource,
    journey_resource: JourneyResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/documents/{document_id}", document_resource)
    app.add_route("/v1/documents/{document_id}/stage", stage_resource)
    app.add_route("/v1/documents/{document_id}/journey", journey_resource)
    return app
