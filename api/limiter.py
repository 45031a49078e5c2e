"""
api/limiter.py -- Rate limiting for the public (unauthenticated) routes.

/register and /login are the only routes reachable without a token, so they
are the only brute-force surface. Both are decorated with
@limiter.limit(public_route_limit); protected routes carry no limit.

The decorator must sit BELOW @router.post: the route limit is checked by the
wrapper it returns, so FastAPI has to register the wrapped function. The
SlowAPIMiddleware mounted in api/main.py only applies application-wide
limits, and none are configured.

One module-level Limiter keeps a single in-memory counter store, found by
the middleware on app.state.limiter.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import get_settings


def public_route_limit() -> str:
    """Current LOGIN_RATE_LIMIT, e.g. "10/minute" per client IP and route.

    Read on every request so a changed setting applies without re-importing
    the route modules.
    """
    return get_settings().login_rate_limit


limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
