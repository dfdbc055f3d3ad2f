"""Application entry point and composition root."""

import logging

from doctrack import __version__
from doctrack.application.use_cases.document.create_document import CreateDocumentUseCase
from doctrack.application.use_cases.document.get_document import GetDocumentUseCase
from doctrack.application.use_cases.routing.get_journey import GetJourneyUseCase
from doctrack.application.use_cases.routing.propose_transition import (
    ProposeTransitionUseCase,
)
from doctrack.config import Settings, get_settings
from doctrack.infrastructure.auth.keycloak_provider import KeycloakProvider
from doctrack.infrastructure.persistence.postgres.connection import create_pool, ping
from doctrack.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from doctrack.interfaces.api.app import create_app
from doctrack.interfaces.api.middleware.auth import AuthMiddleware
from doctrack.interfaces.api.middleware.cors import CORSMiddleware
from doctrack.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from doctrack.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from doctrack.interfaces.api.resources.health import HealthResource
from doctrack.interfaces.api.resources.routing import DocumentStageResource, JourneyResource

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once from settings."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    print(f"DocTrack v{__version__}")


def create_doctrack_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            department_claim=settings.keycloak_department_claim,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None and not settings.trust_principal_headers:
        logger.warning("No identity source configured; all requests will be unauthorized")

    async def readiness_check() -> bool:
        return await ping(pool)

    app = create_app(
        documents_resource=DocumentsResource(CreateDocumentUseCase(uow_factory)),
        document_resource=DocumentResource(GetDocumentUseCase(uow_factory)),
        stage_resource=DocumentStageResource(ProposeTransitionUseCase(uow_factory)),
        journey_resource=JourneyResource(GetJourneyUseCase(uow_factory)),
        health_resource=HealthResource(readiness_check),
        middleware=[
            CORSMiddleware(
                settings.cors_origin_list,
                allow_principal_headers=settings.trust_principal_headers,
            ),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, trust_headers=settings.trust_principal_headers),
        ],
    )
    logger.info("DocTrack v%s configured (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_doctrack_app(), host="0.0.0.0", port=8000)
