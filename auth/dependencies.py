"""
auth/dependencies.py -- FastAPI Depends() helper that gates protected routes.

Routes are classified when they are registered, not per request: the
protected router in api/ carries require_token() as a router-level
dependency, the public router (/register, /login) does not. A request to a
public route therefore never reaches this module.

require_token() walks the per-request state machine:

  Unauthenticated --(no Authorization header)--------> Rejected 403
                  --(token expired)------------------> Rejected 401
                  --(bad signature / malformed)------> Rejected 500
                  --(valid)--------------------------> Authenticated

The 500 for an invalid token is the coarse mapping existing clients expect;
it is not a server fault in the usual sense.

Layer rule: no imports from api/ or employees/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging

from fastapi import Request

from auth.tokens import TokenExpired, TokenInvalid, verify_access_token
from core.errors import MissingToken, ServerFault, Unauthorized

logger = logging.getLogger("employeeapi.auth")


def _extract_token(request: Request) -> str:
    """Return the token from the Authorization header, or "" if absent.

    Accepts both the raw token and the "Bearer <token>" form.
    """
    header = request.headers.get("Authorization", "").strip()
    if header[:7].lower() == "bearer ":
        return header[7:].strip()
    return header


def require_token(request: Request) -> int:
    """Require a valid token. Returns the authenticated subject id.

    Use as a router-level dependency:
        router = APIRouter(dependencies=[Depends(require_token)])

    On success the subject id is also stored on request.state.user_id so
    handlers that do not declare the dependency can still read it.
    """
    token = _extract_token(request)
    if not token:
        raise MissingToken("No token provided.", auth=False)

    try:
        user_id = verify_access_token(token)
    except TokenExpired as exc:
        raise Unauthorized("Token expired. Please login again.", auth=False) from exc
    except TokenInvalid as exc:
        logger.warning("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise ServerFault("Failed to authenticate token.", auth=False) from exc

    request.state.user_id = user_id
    return user_id
