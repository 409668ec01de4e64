"""HR One Authentication Library."""

from .jwt_dep import (
    AuthContext,
    BearerToken,
    TokenPayload,
    get_auth_context,
    verify_bearer_token,
)

from .middleware import SecurityHeadersMiddleware

__all__ = [
    "AuthContext",
    "BearerToken",
    "TokenPayload",
    "get_auth_context",
    "verify_bearer_token",
    "SecurityHeadersMiddleware",
]

__version__ = "0.1.0"
