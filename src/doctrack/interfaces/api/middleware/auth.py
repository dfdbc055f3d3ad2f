"""Auth middleware - resolves the acting principal for the request."""

import falcon.asgi

from doctrack.domain.value_objects import Principal, Role

ROLE_HEADER = "X-Principal-Role"
DEPARTMENT_HEADER = "X-Principal-Department"


def principal_from_headers(req: falcon.asgi.Request) -> Principal | None:
    """Read principal from trusted upstream headers."""
    raw_role = (req.get_header(ROLE_HEADER) or "").strip().lower()
    if not raw_role:
        return None
    try:
        role = Role(raw_role)
    except ValueError:
        return None
    return Principal(role=role, department=(req.get_header(DEPARTMENT_HEADER) or "").strip())


class AuthMiddleware:
    """Middleware that sets req.context.principal (None when unauthenticated).

    A bearer token is introspected by Keycloak when a provider is configured.
    Without one, principal headers are accepted only if ``trust_headers`` is on.
    """

    def __init__(self, keycloak_provider=None, trust_headers: bool = False) -> None:
        self._keycloak = keycloak_provider
        self._trust_headers = trust_headers

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract principal from Authorization header or trusted headers."""
        req.context.principal = None
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer ") and self._keycloak:
            req.context.principal = self._keycloak.decode_token(auth[7:])
            return
        if self._trust_headers:
            req.context.principal = principal_from_headers(req)
