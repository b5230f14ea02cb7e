"""
HealthTrack Backend — Password Hashing & Identity Tokens
=========================================================

What:  bcrypt password hashing, HS256 JWT issuance/verification, and the
       FastAPI dependency that guards protected routes.
Why:   Keeps every credential primitive in one module so routes and services
       never touch raw secrets or token internals.
How:   - bcrypt runs in Starlette's threadpool (it is CPU-bound by design and
         would otherwise stall the event loop for every login)
       - Tokens carry the user id in an `id` claim plus `iat`/`exp`
       - `get_current_user_id` reads `Authorization: Bearer <token>` and
         raises AuthError on anything it cannot verify
Who:   AuthService (hash/verify/issue) and protected route handlers (Depends).

Token lifecycle:
    Issued at login, valid for settings.jwt_expiry_days (default 7).
    There is no revocation list; expiry is the only invalidation path.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import AuthError, HealthTrackError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating, so both hashing and checking truncate explicitly
BCRYPT_MAX_BYTES = 72

# auto_error=False: a missing header reaches our handler as None and becomes
# a 401 AuthError instead of FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _signing_key() -> str:
    # Startup refuses an empty secret; this covers apps built without the lifespan
    if not settings.jwt_secret:
        raise HealthTrackError(
            message="Token signing is not configured",
            context={"setting": "JWT_SECRET"},
        )
    return settings.jwt_secret


async def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of `password` as a UTF-8 string."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed = await run_in_threadpool(bcrypt.hashpw, _encode_password(password), salt)
    return hashed.decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of `password` against a stored bcrypt hash."""
    try:
        return await run_in_threadpool(
            bcrypt.checkpw, _encode_password(password), password_hash.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.error("Malformed password hash encountered during login")
        return False


def create_access_token(user_id: int, now: Optional[datetime] = None) -> str:
    """
    Issue a signed token identifying `user_id`.

    Args:
        user_id: Primary key of the authenticated user.
        now: Issue time; defaults to the current UTC time.

    Returns:
        Compact JWT string.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(payload, _signing_key(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify `token` and return the user id it carries.

    Raises:
        AuthError: Expired, badly signed, malformed, or missing the id claim.
    """
    try:
        payload = jwt.decode(
            token,
            _signing_key(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError(message="Token expired", context={"reason": "expired"})
    except jwt.InvalidTokenError as e:
        raise AuthError(message="Invalid token", context={"reason": type(e).__name__})

    user_id = payload.get("id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthError(message="Invalid token", context={"reason": "missing id claim"})
    return user_id


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """
    FastAPI dependency for protected routes.

    The verified id is also left on request.state so the access log can
    attribute the request.

    Example usage in a route:
        @router.post("/record")
        async def create_record(user_id: int = Depends(get_current_user_id)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(message="Authorization token required")
    user_id = decode_access_token(credentials.credentials)
    request.state.user_id = user_id
    return user_id
