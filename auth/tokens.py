"""
auth/tokens.py -- JWT issue/verify and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with JWT_SECRET and carry the
       subject user id, the issue time and the expiry. They are stateless:
       there is no session table and no server-side revocation, so a token
       stays valid until its embedded expiry.

       verify_access_token() raises rather than returning None because the
       gate answers differently per failure: TokenExpired -> 401,
       TokenInvalid -> 500.

  Passwords: bcrypt with a per-hash salt from bcrypt.gensalt(). bcrypt only
       reads 72 bytes and bcrypt>=5 rejects longer input, so the UTF-8 encoding
       is cut to 72 bytes before hashing and before checking. Long passwords
       are accepted; bytes past the 72nd do not affect the hash.

  JWT_SECRET: sourced from core.config.get_settings(), which validates the key
       at startup. The same key signs and verifies.

Layer rule: no imports from api/ or employees/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import get_settings
from core.errors import NotFound, Unauthorized

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("employeeapi.auth")

_settings = get_settings()

_ALGORITHM = "HS256"


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpired(TokenError):
    """The token's exp claim is in the past."""


class TokenInvalid(TokenError):
    """Bad signature, malformed token, or missing claims."""


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


_BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password."""
    return bcrypt.hashpw(_password_bytes(plain), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in the store.
        return False


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(
    subject_id: int,
    expire_seconds: int = 0,
    issued_at: datetime | None = None,
) -> str:
    """Encode a signed JWT for subject_id.

    Args:
        subject_id:     Numeric user id stored in the "id" claim.
        expire_seconds: Token lifetime. If 0 (default), uses
                        Settings.token_expire_seconds (24 hours).
        issued_at:      Issue time. Defaults to now; pass an earlier time to
                        simulate an aged token.
    """
    duration = expire_seconds if expire_seconds > 0 else _settings.token_expire_seconds
    iat = issued_at or datetime.now(timezone.utc)
    payload = {
        "id": subject_id,
        "iat": iat,
        "exp": iat + timedelta(seconds=duration),
    }
    return jwt.encode(payload, _settings.jwt_secret, algorithm=_ALGORITHM)


def verify_access_token(token: str) -> int:
    """Verify a JWT and return the embedded subject id.

    Raises:
        TokenExpired: the exp claim is in the past.
        TokenInvalid: signature mismatch, malformed token, or no "id" claim.
    """
    try:
        payload = jwt.decode(token, _settings.jwt_secret, algorithms=[_ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired(str(exc)) from exc
    except JWTError as exc:
        raise TokenInvalid(str(exc)) from exc

    subject_id = payload.get("id")
    if not isinstance(subject_id, int):
        raise TokenInvalid("Token has no subject id.")
    return subject_id


# ---------------------------------------------------------------------------
# User authentication
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, username: str, password: str) -> User:
    """Check a username/password pair against the credential store.

    Unlike a generic "bad credentials" answer, the API distinguishes an
    unknown username (404) from a wrong password (401), so the two failures
    raise different errors.
    """
    user = store.get_by_username(username)
    if user is None:
        raise NotFound("User not found.")
    if not verify_password(password, user.hashed_password):
        logger.warning("Login rejected: bad password for user id %s", user.id)
        raise Unauthorized("Invalid credentials.", auth=False)
    return user
