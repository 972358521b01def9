"""Authentication and authorization system for the feedback service."""

from .adapters.base import (
    AuthAdapter,
    AuthenticationError,
    AuthorizationError,
    ForbiddenError,
    Principal,
    UnauthorizedError,
)
from .context import AuthContext
from .factory import get_auth_adapter
from .middleware import get_auth_context, get_auth_context_optional

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "AuthorizationError",
    "ForbiddenError",
    "Principal",
    "UnauthorizedError",
    "AuthContext",
    "get_auth_context",
    "get_auth_context_optional",
    "get_auth_adapter",
]
