"""Authentication adapters for different providers."""

from .base import AuthAdapter, Principal
from .jwt import JWTAuthAdapter
from .none import NoAuthAdapter

__all__ = [
    "AuthAdapter",
    "Principal",
    "JWTAuthAdapter",
    "NoAuthAdapter",
]
