"""
Session middleware: resolve the request identity from the session cookie.

The identity is stored on request.state, never in a module global, and handlers
receive it through the get_identity / get_current_user dependencies. A missing,
expired, tampered or malformed credential makes the request anonymous; this
layer never rejects a request. Rejection is left to the authorization policy.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gallery.core.config import get_settings
from gallery.core.security import verify_credential
from gallery.schemas.auth import Identity

logger = logging.getLogger(__name__)


def resolve_identity(token: str | None) -> Identity | None:
    """Identity for a raw cookie value, or None for anonymous."""
    if not token:
        return None
    identity = verify_credential(token)
    if identity is None:
        logger.debug("Invalid session credential; treating request as anonymous")
    return identity


class SessionMiddleware(BaseHTTPMiddleware):
    """Attach request.state.identity (Identity or None) to every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
        request.state.identity = resolve_identity(token)
        return await call_next(request)
