"""CORS middleware for the browser routing client."""

import falcon.asgi

from doctrack.interfaces.api.middleware.auth import DEPARTMENT_HEADER, ROLE_HEADER

# Document routes only read (GET), log (POST) and move (PUT)
ALLOWED_METHODS = "GET, POST, PUT, OPTIONS"


class CORSMiddleware:
    """Adds CORS headers and answers OPTIONS preflight.

    Principal headers are advertised only when the API trusts them; otherwise
    a browser cannot even send them cross-origin.
    """

    def __init__(self, origins: list[str], allow_principal_headers: bool = False) -> None:
        self._origins = origins
        headers = ["Authorization", "Content-Type"]
        if allow_principal_headers:
            headers += [ROLE_HEADER, DEPARTMENT_HEADER]
        self._allowed_headers = ", ".join(headers)

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        if origin and origin in self._origins:
            resp.set_header("Access-Control-Allow-Origin", origin)
            resp.set_header("Vary", "Origin")
        elif self._origins:
            resp.set_header("Access-Control-Allow-Origin", self._origins[0])
        resp.set_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", self._allowed_headers)
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        self._set_cors_headers(req, resp)
        if req.method == "OPTIONS":
            resp.status = falcon.HTTP_200
            resp.media = {}
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._set_cors_headers(req, resp)
