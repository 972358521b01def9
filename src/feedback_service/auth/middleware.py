"""Authentication middleware for FastAPI."""

from __future__ import annotations

from fastapi import Header, HTTPException

from ..logging import bind_user_id, get_logger
from .adapters.base import AuthenticationError
from .context import AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)


def _unauthenticated() -> AuthContext:
    return AuthContext(email=None, role=None, principal=None, token=None)


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """
    Extract authentication context from request headers.

    This function:
    1. Extracts Bearer token from Authorization header
    2. Verifies token using the configured auth adapter
    3. Returns AuthContext carrying the caller's email and role

    For no-auth mode, any token (or "dev-token") will work.

    Raises:
        HTTPException: 401 when the header is malformed or the token is invalid
    """
    adapter = get_auth_adapter()

    # NoAuthAdapter has this attribute
    is_no_auth_mode = hasattr(adapter, "default_user_id")

    if not authorization:
        if is_no_auth_mode:
            authorization = "Bearer dev-token"
        else:
            return _unauthenticated()

    if not authorization.startswith("Bearer "):
        logger.warning("Invalid authorization format received")
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]

    if not token:
        logger.warning("Empty token provided")
        raise HTTPException(
            status_code=401,
            detail="Empty token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    email = principal.get("email") or principal["subject"]
    bind_user_id(email)

    logger.debug(
        "Request authenticated",
        provider=principal.get("provider"),
        role=principal.get("role"),
    )

    return AuthContext(
        email=email,
        role=principal.get("role"),
        principal=principal,
        token=token,
    )


async def get_auth_context_optional(authorization: str | None = Header(None)) -> AuthContext:
    """
    Optional authentication - returns unauthenticated context on any auth failure.

    Use this for endpoints that work both authenticated and unauthenticated.
    """
    try:
        return await get_auth_context(authorization)
    except HTTPException:
        return _unauthenticated()
