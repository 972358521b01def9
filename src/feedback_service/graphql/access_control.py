"""
Shared access control logic for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.adapters.base import ForbiddenError, UnauthorizedError
from ..auth.middleware import get_auth_context_optional
from ..config import settings
from ..logging import get_logger

if TYPE_CHECKING:
    from ..auth.context import AuthContext

logger = get_logger(__name__)


async def get_auth_context_from_info(info: strawberry.Info) -> "AuthContext | None":
    """
    Extract auth context from GraphQL info object.

    A context already resolved for this request (``info.context["auth"]``) is
    reused; otherwise the request's Authorization header is verified. Returns
    None if neither is available.
    """
    auth_context = info.context.get("auth")
    if auth_context is not None:
        return auth_context

    request = info.context.get("request")
    if not request:
        logger.error("Request not found in GraphQL context")
        return None

    auth_context = await get_auth_context_optional(
        authorization=request.headers.get("authorization"),
    )
    info.context["auth"] = auth_context
    return auth_context


def ensure_authenticated(auth_context: "AuthContext | None") -> "AuthContext":
    """Return the context if it carries a user, else raise ``UnauthorizedError``."""
    if auth_context is None or not auth_context.is_authenticated:
        logger.info("Unauthenticated access to protected field")
        raise UnauthorizedError()
    return auth_context


def ensure_role(auth_context: "AuthContext | None", role: str) -> "AuthContext":
    """Return the context if the user has ``role``.

    Raises:
        UnauthorizedError: no authenticated user
        ForbiddenError: authenticated without the role
    """
    auth_context = ensure_authenticated(auth_context)
    if not auth_context.has_role(role):
        logger.info("Access denied", required_role=role, role=auth_context.role)
        raise ForbiddenError()
    return auth_context


async def require_user(info: strawberry.Info) -> "AuthContext":
    return ensure_authenticated(await get_auth_context_from_info(info))


async def require_admin(info: strawberry.Info) -> "AuthContext":
    return ensure_role(await get_auth_context_from_info(info), settings.admin_role)
