"""Bearer-token authentication middleware.

Requests under a protected path prefix must carry
``Authorization: Bearer <token>``. The verified identity is attached to
``request.state.identity``; handlers receive it through the
``identity_from_request`` dependency.
"""

import logging
from uuid import UUID

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from snippetbox.services.credentials import extract_identity
from snippetbox.services.exceptions import (
    MissingCredentialError,
    TokenExpiredError,
    UnauthorizedError,
)
from snippetbox.services.tokens import TokenCodec

logger = logging.getLogger(__name__)

# Paths that require an authenticated identity
PROTECTED_PATHS = [
    "/snippets",
]


def unauthorized_response() -> JSONResponse:
    """The single 401 shape for every credential or token failure."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Unauthorized"},
        headers={"WWW-Authenticate": "Bearer"},
    )


def identity_from_request(request: Request) -> UUID:
    """Dependency returning the identity the middleware attached.

    Raises MissingCredentialError (401) when the route was reached without
    passing through authentication.
    """
    identity = getattr(request.state, "identity", None)
    if not isinstance(identity, UUID):
        raise MissingCredentialError("No authenticated identity on request")
    return identity


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Authenticates requests to protected paths with a bearer token."""

    def __init__(
        self,
        app: ASGIApp,
        token_codec: TokenCodec,
        protected_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.token_codec = token_codec
        self.protected_paths = protected_paths or PROTECTED_PATHS

    def _is_protected(self, path: str) -> bool:
        # Segment-boundary match: /snippetsfoo is not under /snippets
        return any(path == p or path.startswith(p + "/") for p in self.protected_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        # CORS preflight never carries credentials
        if request.method == "OPTIONS" or not self._is_protected(path):
            return await call_next(request)

        try:
            identity = extract_identity(request.headers.get("Authorization"), self.token_codec)
        except TokenExpiredError:
            logger.debug(
                f"Expired token for: {request.method} {path}",
                extra={"method": request.method, "path": path, "reason": "expired"},
            )
            return unauthorized_response()
        except UnauthorizedError as e:
            logger.warning(
                f"{type(e).__name__} for: {request.method} {path} - {e}",
                extra={"method": request.method, "path": path, "reason": type(e).__name__},
            )
            return unauthorized_response()

        request.state.identity = identity
        return await call_next(request)
