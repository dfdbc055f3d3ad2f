"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from doctrack.application.use_cases.document.create_document import CreateDocumentUseCase
from doctrack.application.use_cases.document.get_document import GetDocumentUseCase
from doctrack.application.use_cases.routing.get_journey import GetJourneyUseCase
from doctrack.application.use_cases.routing.propose_transition import (
    ProposeTransitionUseCase,
)
from doctrack.interfaces.api.app import create_app
from doctrack.interfaces.api.middleware.auth import (
    DEPARTMENT_HEADER,
    ROLE_HEADER,
    AuthMiddleware,
)
from doctrack.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from doctrack.interfaces.api.resources.health import HealthResource
from doctrack.interfaces.api.resources.routing import DocumentStageResource, JourneyResource


def as_principal(role: str, department: str = "") -> dict[str, str]:
    """Request headers identifying the acting principal."""
    headers = {ROLE_HEADER: role}
    if department:
        headers[DEPARTMENT_HEADER] = department
    return headers


ADMIN = as_principal("admin")
DEPUTY = as_principal("deputy")
DIRECTOR = as_principal("director")


@pytest.fixture
def app(uow_factory):
    """Falcon ASGI app wired to the in-memory UnitOfWork."""
    return create_app(
        documents_resource=DocumentsResource(CreateDocumentUseCase(unit_of_work_factory=uow_factory)),
        document_resource=DocumentResource(GetDocumentUseCase(unit_of_work_factory=uow_factory)),
        stage_resource=DocumentStageResource(
            ProposeTransitionUseCase(unit_of_work_factory=uow_factory)
        ),
        journey_resource=JourneyResource(GetJourneyUseCase(unit_of_work_factory=uow_factory)),
        health_resource=HealthResource(),
        middleware=[AuthMiddleware(trust_headers=True)],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
