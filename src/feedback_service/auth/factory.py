"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

from ..config import get_settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter() -> AuthAdapter:
    """Create and return the configured auth adapter.

    Settings are reloaded on each call so ``FEEDBACK_AUTH_*`` values from the
    environment or ``.env`` always take effect.
    """
    current = get_settings()
    provider = current.auth_provider
    config = current.auth_config

    if provider == "none":
        return NoAuthAdapter(
            default_user_id=config.get("default_user_id", "dev-user"),
            default_email=config.get("default_email", "dev@example.com"),
            default_role=config.get("default_role"),
        )

    elif provider == "jwt":
        secret_key = config.get("secret_key") or current.jwt_secret
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set FEEDBACK_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=config.get("algorithm", current.jwt_algorithm),
            issuer=config.get("issuer", current.jwt_issuer),
            audience=config.get("audience", current.jwt_audience),
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")
