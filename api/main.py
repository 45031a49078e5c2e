"""
api/main.py -- FastAPI application entry point for the Employee API.

Run with:      python main.py
               uvicorn api.main:app --reload --port 3000

Route classification (fixed at registration time):
  public     -- api.routes.auth.router: POST /register, POST /login
  protected  -- every other router carries Depends(require_token):
                api.routes.employees.router, plus the root and docs
                routes registered on `protected` below. Unmatched paths
                are gated in http_exception_handler.

Middleware stack (outermost to innermost):
  1. CORSMiddleware    -- adds CORS headers for allowed browser origins
  2. SlowAPIMiddleware -- enforces per-route rate limits from api.limiter

Lifespan builds the single database engine, attaches both stores to
app.state, and disposes the engine on shutdown.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.limiter import limiter
from api.models import ErrorResponse, FieldError
from api.routes.auth import router as auth_router
from api.routes.employees import router as employees_router
from auth.dependencies import require_token
from auth.store import UserStore
from core.config import get_settings
from core.database import create_db_engine
from core.errors import ApiError, NotFound, ValidationError
from employees.store import EmployeeStore

VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("employeeapi.api")

_settings = get_settings()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared engine and stores on startup; dispose on shutdown.

    The stores are injected through app.state rather than imported as
    module-level singletons, so tests can swap them by replacing this
    lifespan.
    """
    engine = create_db_engine(_settings.resolved_database_url())
    logger.info("Employee API starting up (database=%s)", engine.url.render_as_string(hide_password=True))
    app.state.engine = engine
    app.state.user_store = UserStore(engine)
    app.state.employee_store = EmployeeStore(engine)
    logger.info("Stores initialized (users=%d)", app.state.user_store.count_users())

    yield

    engine.dispose()
    logger.info("Employee API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Employee Management API",
    description="CRUD over employee records with token-based authentication.",
    version=VERSION,
    lifespan=lifespan,
    # The built-in docs routes would be public. Protected equivalents are
    # registered on the `protected` router below.
    openapi_url=None,
    docs_url=None,
    redoc_url=None,
    # "/register/" must not redirect to the public "/register"; unmatched
    # paths go to the protected 404 fallback instead.
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Protected system routes
# ---------------------------------------------------------------------------

protected = APIRouter(dependencies=[Depends(require_token)])


@protected.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Employee Management REST API - Protected"


@protected.get("/openapi.json", include_in_schema=False)
async def openapi_schema() -> JSONResponse:
    return JSONResponse(app.openapi())


@protected.get("/docs", include_in_schema=False)
async def docs():
    """Swagger UI -- requires authentication."""
    return get_swagger_ui_html(openapi_url="/openapi.json", title="Employee Management API")


# ---------------------------------------------------------------------------
# Router registration
#
# Paths no route claims are handled by http_exception_handler below, which
# runs require_token before answering 404 -- nothing outside the public
# router is reachable anonymously.
# ---------------------------------------------------------------------------

app.include_router(auth_router, tags=["Auth"])
app.include_router(employees_router, tags=["Employees"])
app.include_router(protected)


# ---------------------------------------------------------------------------
# Exception handlers
#
# Every handled error renders {"message": ..., **extra} so clients can read
# one field regardless of status code.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(**content).model_dump(exclude_none=True),
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error_response(exc.status_code, exc.to_content())


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a Retry-After header when a rate limit is exceeded."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = _error_response(429, {"message": "Too many requests."})
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with one entry per failing field.

    A ValueError raised by a field_validator carries the user-facing message
    in ctx["error"]; other pydantic errors fall back to their default msg.
    """
    errors = []
    for err in exc.errors():
        ctx_error = (err.get("ctx") or {}).get("error")
        errors.append(
            FieldError(
                field=".".join(str(part) for part in err["loc"] if part != "body") or "body",
                message=str(ctx_error) if ctx_error is not None else err["msg"],
            ).model_dump()
        )
    error = ValidationError(errors=errors)
    return _error_response(error.status_code, error.to_content())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors; unmatched paths and methods go through the gate first.

    The router raises 404/405 when no route fully matches. Those requests
    never reached a public route, so they are protected: without a valid
    token they get the gate's answer (403/401/500), with one a 404/405.
    """
    if exc.status_code in (404, 405):
        try:
            require_token(request)
        except ApiError as gate_error:
            return _error_response(gate_error.status_code, gate_error.to_content())
        if exc.status_code == 404:
            return _error_response(404, NotFound("Not found.").to_content())
    return _error_response(exc.status_code, {"message": str(exc.detail)})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors (store faults included).

    The raw exception is written to the log only, never to the response
    body. The process keeps serving other requests.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, {"message": "An unexpected error occurred."})
