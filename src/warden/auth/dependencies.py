"""FastAPI auth dependencies.

Learn: get_current_user is applied with Depends() at the router level in
api/__init__.py, so every protected route is checked before its handler
runs. Handlers that need the identity declare the same dependency as a
parameter; FastAPI caches it per request, so the token is verified once.

The identity is a plain value threaded through the call chain (handler →
service → ownership check), never stashed on the request object.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header

from warden.auth.jwt import TokenIssuer, get_token_issuer
from warden.errors import AuthenticationError, InvalidTokenError, MissingTokenError

logger = structlog.get_logger()


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated user making the request."""

    user_id: int
    email: str


def authenticate_bearer(
    authorization: Optional[str], issuer: TokenIssuer
) -> CurrentIdentity:
    """Turn a raw Authorization header into an identity, or raise."""
    if not authorization:
        raise MissingTokenError()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise InvalidTokenError("Expected 'Authorization: Bearer <token>'")

    claims = issuer.verify(token)
    return CurrentIdentity(user_id=claims.subject, email=claims.email)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> CurrentIdentity:
    """Extract current identity (required, 401 if no valid token)."""
    try:
        return authenticate_bearer(authorization, issuer)
    except AuthenticationError as e:
        logger.info("auth.token_rejected", reason=e.code)
        raise
