"""Base authentication adapter interface and types."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict


class Principal(TypedDict):
    """Identity extracted from an incoming token."""

    provider: Literal["jwt", "none"]
    subject: str  # provider user id (sub)
    email: NotRequired[str]
    display_name: NotRequired[str]
    role: NotRequired[str]
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    """Provider-agnostic authentication adapter interface."""

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and return the principal identity.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def issue_token(self, subject: str | None = None, claims: dict | None = None) -> str:
        """Issue a new token (used by tooling and tests)."""
        ...


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    pass


class AuthorizationError(Exception):
    """Raised when authorization fails."""

    pass


class UnauthorizedError(AuthorizationError):
    """The caller is not authenticated."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AuthorizationError):
    """The caller is authenticated but lacks the required role."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
