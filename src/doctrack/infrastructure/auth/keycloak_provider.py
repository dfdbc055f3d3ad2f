"""Keycloak OIDC provider - resolves the acting principal from a token."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from doctrack.domain.value_objects import Principal, Role

logger = logging.getLogger(__name__)

# Highest authority first when a user carries several realm roles
_ROLE_PRECEDENCE = (Role.DIRECTOR, Role.DEPUTY, Role.ADMIN, Role.DEPARTMENT)


def principal_from_claims(claims: dict, department_claim: str = "department") -> Principal | None:
    """Map token claims to a principal; None when no office role is granted."""
    realm_roles = set(claims.get("realm_access", {}).get("roles", []))
    role = next((r for r in _ROLE_PRECEDENCE if r.value in realm_roles), None)
    if role is None:
        return None
    department = claims.get(department_claim) or ""
    if isinstance(department, list):
        department = department[0] if department else ""
    return Principal(role=role, department=str(department).strip())


class KeycloakProvider:
    """Keycloak OIDC - validates JWT and extracts the principal."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        department_claim: str = "department",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._department_claim = department_claim

    def decode_token(self, token: str) -> Principal | None:
        """Introspect token, return principal or None if inactive or role-less."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return principal_from_claims(token_info, self._department_claim)
