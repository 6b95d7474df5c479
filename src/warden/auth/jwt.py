"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. A token
carries {sub, email, iat, exp} and an HMAC signature; validity is purely
cryptographic + time-based. Nothing is persisted, so there is no revocation:
a token dies when its exp passes.

The issuer is built once from settings (get_token_issuer) and shared by
reference. Its secret and lifetime never change for the life of the process.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt

from warden.config import settings
from warden.errors import InvalidTokenError, SigningConfigError, TokenExpiredError


@dataclass(frozen=True)
class TokenClaims:
    """Decoded, verified token contents."""

    subject: int
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token plus its declared lifetime."""

    access_token: str
    expires_in: int  # seconds
    token_type: str = "bearer"


class TokenIssuer:
    """Signs and verifies access tokens with a symmetric secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(minutes=30),
    ):
        if not secret:
            raise SigningConfigError("JWT secret must not be empty")
        if lifetime <= timedelta(0):
            raise SigningConfigError("Token lifetime must be positive")
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = lifetime

    def issue(
        self,
        subject: int,
        email: str,
        issued_at: Optional[datetime] = None,
    ) -> IssuedToken:
        """Create a signed access token for a user.

        Learn: issued_at is only overridden by tests that need an
        already-lapsed token; callers normally let it default to now.
        """
        iat = issued_at or datetime.now(timezone.utc)
        payload = {
            # JWT requires sub to be a string
            "sub": str(subject),
            "email": email,
            "iat": iat,
            "exp": iat + self.lifetime,
        }
        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (NotImplementedError, jwt.InvalidKeyError) as e:
            raise SigningConfigError(f"Cannot sign tokens: {e}") from e
        return IssuedToken(
            access_token=token,
            expires_in=int(self.lifetime.total_seconds()),
        )

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode a token.

        Returns the claims on success.
        Raises TokenExpiredError or InvalidTokenError on failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "email", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            subject = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError("Invalid token: malformed subject")

        return TokenClaims(
            subject=subject,
            email=payload["email"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer built from settings. Also a FastAPI dependency."""
    return TokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )
