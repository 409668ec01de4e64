"""Bearer token dependency for FastAPI services."""

import os
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional, Union

import httpx
import structlog
from fastapi import Depends, HTTPException, Header, status
from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)

# Configuration from environment
ISSUER = os.getenv("OIDC_ISSUER", "")
AUDIENCE = os.getenv("OIDC_AUDIENCE", "")
JWKS_URL = os.getenv("JWKS_URL", "")


class TokenPayload(BaseModel):
    """JWT token payload model."""

    sub: str
    iss: Optional[str] = None
    aud: Union[str, List[str], None] = None
    exp: Optional[int] = None
    iat: Optional[int] = None
    email: Optional[str] = None
    name: Optional[str] = None
    scope: Optional[str] = None


class BearerToken(BaseModel):
    """A bearer token and, when it could be read, its claims."""

    raw: str
    payload: Optional[TokenPayload] = None
    verified: bool = False


class AuthContext(BaseModel):
    """Authentication context for the current request."""

    user_id: str
    email: Optional[str] = None
    scopes: List[str] = []
    access_token: str


@lru_cache(maxsize=1)
def _get_jwks() -> Dict[str, Any]:
    """Fetch and cache JWKS from the identity provider."""
    try:
        with httpx.Client(timeout=10) as client:
            response = client.get(JWKS_URL)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPError as e:
        logger.error("Failed to fetch JWKS", error=str(e), jwks_url=JWKS_URL)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to verify tokens - authentication service unavailable"
        )


def _get_signing_key(kid: str) -> Dict[str, Any]:
    """Get the signing key for the given key ID."""
    jwks = _get_jwks()

    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token - unknown key ID",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _read_unverified(token: str) -> Optional[TokenPayload]:
    """Best-effort claim read for opaque pass-through mode."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    try:
        return TokenPayload(**claims)
    except ValidationError:
        return None


def verify_bearer_token(
    authorization: Annotated[Optional[str], Header()] = None
) -> BearerToken:
    """Extract the bearer token and verify it when a JWKS is configured.

    Without ``JWKS_URL`` the token is forwarded as-is and the upstream API
    is the one that decides whether it is acceptable.
    """
    if not authorization:
        raise _unauthorized("Missing authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Invalid authorization header format")

    if not JWKS_URL:
        return BearerToken(raw=token, payload=_read_unverified(token))

    try:
        unverified_header = jwt.get_unverified_header(token)
        kid = unverified_header.get("kid")
        if not kid:
            raise _unauthorized("Invalid token - missing key ID")

        signing_key = _get_signing_key(kid)

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[signing_key.get("alg", "RS256")],
            audience=AUDIENCE or None,
            issuer=ISSUER or None,
            options={"verify_signature": True, "verify_exp": True, "verify_aud": bool(AUDIENCE)}
        )

        return BearerToken(raw=token, payload=TokenPayload(**payload), verified=True)

    except JWTError as e:
        logger.warning("JWT verification failed", error=str(e))
        raise _unauthorized(f"Invalid token: {str(e)}")


def get_auth_context(token: BearerToken = Depends(verify_bearer_token)) -> AuthContext:
    """Build the authentication context forwarded to upstream calls."""
    payload = token.payload
    if payload is None:
        return AuthContext(user_id="anonymous", access_token=token.raw)

    return AuthContext(
        user_id=payload.sub,
        email=payload.email,
        scopes=payload.scope.split() if payload.scope else [],
        access_token=token.raw,
    )

