"""
Bearer key check for the http transport.

Only `server.py --transport http` installs this; stdio sessions (and the test
wrapper) never see it. Keys live under server.authentication.api_keys:

    api_keys:
      <key>: {name: <client name>, role: <role>}
"""

import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)

# Liveness and metadata routes stay reachable for health checks and load balancers
PUBLIC_PATHS = ("/health", "/healthz", "/version")

BEARER_HINT = "Send 'Authorization: Bearer <api_key>'"


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject MCP http requests that do not carry a configured API key."""

    def __init__(self, app, config):
        super().__init__(app)
        self.config = config
        self.public_paths = PUBLIC_PATHS

        if self.config.auth_enabled:
            logger.info(f"[HTTP AUTH] Bearer keys required ({len(self.config.api_keys)} configured), "
                        f"open paths: {', '.join(self.public_paths)}")
        else:
            logger.info("[HTTP AUTH] Disabled, every request is accepted")

    def _reject(self, request: Request, reason: str, detail: str) -> JSONResponse:
        client_host = request.client.host if request.client else "unknown"
        logger.warning(f"[HTTP AUTH] {reason}: {request.method} {request.url.path} from {client_host}")
        return JSONResponse(
            status_code=401,
            content={"error": reason, "message": detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    async def dispatch(self, request: Request, call_next):
        if not self.config.auth_enabled or request.url.path.startswith(self.public_paths):
            return await call_next(request)

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return self._reject(request, "Authentication required", f"No Authorization header. {BEARER_HINT}")

        scheme, _, key = auth_header.partition(" ")
        key = key.strip()
        if scheme.lower() != "bearer" or not key or " " in key:
            return self._reject(request, "Malformed Authorization header", BEARER_HINT)

        client = self.config.api_keys.get(key)
        if not client:
            return self._reject(request, "Unknown API key", "The key is not listed in server.authentication.api_keys")

        request.state.client_name = client['name']
        request.state.client_role = client.get('role', 'user')
        logger.debug(f"[HTTP AUTH] {client['name']} ({request.state.client_role}) -> {request.url.path}")
        return await call_next(request)
