"""
api/routes/auth.py -- Public registration and login endpoints.

Routes:
  POST /register  -- create a local account; 201
  POST /login     -- password login; returns a bearer token

Both routes are registered on a router WITHOUT the token dependency: they
are the service's only public entry points. Everything else lives on a
router that carries require_token().

Security:
  Both routes are rate-limited per client IP (api.limiter); a client over
  the limit gets 429 with Retry-After.
  Cache-Control: no-store on login responses so tokens are never cached.
  Unknown username (404) and wrong password (401) are answered differently;
  existing clients rely on the distinction.
"""

import logging

from fastapi import APIRouter, Request, Response
from sqlalchemy.exc import IntegrityError

from api.limiter import limiter, public_route_limit
from api.models import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from auth.models import User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, hash_password
from core.errors import DuplicateEntity

logger = logging.getLogger("employeeapi.auth")

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(public_route_limit)  # must be BELOW @router so the wrapper is what runs
def register(request: Request, body: RegisterRequest) -> RegisterResponse:
    """Create a user account.

    Length rules are enforced by RegisterRequest, so by the time this runs
    the input is valid. Uniqueness is left to the database: a concurrent
    duplicate insert surfaces as IntegrityError, never as two accounts.
    """
    user_store: UserStore = request.app.state.user_store
    user = User(username=body.username, hashed_password=hash_password(body.password))
    try:
        user_id = user_store.create_user(user)
    except IntegrityError as exc:
        raise DuplicateEntity("Username already exists.") from exc

    logger.info("User %d registered", user_id)
    return RegisterResponse(message="User registered successfully.")


@router.post("/login", response_model=LoginResponse)
@limiter.limit(public_route_limit)
def login(request: Request, response: Response, body: LoginRequest) -> LoginResponse:
    """Authenticate with username and password; return a 24-hour token.

    authenticate_user() raises NotFound (404) or Unauthorized (401); the
    exception handlers in api/main.py render them.
    """
    user_store: UserStore = request.app.state.user_store
    user = authenticate_user(user_store, body.username, body.password)

    token = create_access_token(user.id)
    response.headers["Cache-Control"] = "no-store"
    return LoginResponse(auth=True, token=token)
