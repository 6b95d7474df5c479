"""Domain error taxonomy.

Learn: Services raise these instead of HTTPException so the same logic
works outside a request (CLI, scripts, tests). Each class carries one fixed
HTTP status; main.py registers a single handler that turns any WardenError
into a JSON response. Nothing here is transient, so nothing is retried.

    WardenError
    ├── ValidationError          400
    │   └── PasswordTooLongError
    ├── AuthenticationError      401
    │   ├── MissingTokenError
    │   ├── InvalidTokenError
    │   ├── TokenExpiredError
    │   └── InvalidCredentialsError  403
    ├── ConflictError            409
    │   └── EmailAlreadyExistsError
    ├── NotFoundError            404
    │   ├── ResourceNotFoundError
    │   └── UserNotFoundError
    └── IntegrityFault           500
        ├── CredentialIntegrityError
        └── SigningConfigError
"""

from typing import Any, Optional


class WardenError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        body: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


# ─── Input ──────────────────────────────────────────────


class ValidationError(WardenError):
    """Malformed or missing input."""

    status_code = 400


class PasswordTooLongError(ValidationError):
    """Password longer than the 72 bytes bcrypt can see."""

    def __init__(self, message: str = "Password must be at most 72 bytes"):
        super().__init__(message, code="PASSWORD_TOO_LONG")


# ─── Authentication ─────────────────────────────────────


class AuthenticationError(WardenError):
    """Caller could not be authenticated."""

    status_code = 401


class MissingTokenError(AuthenticationError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthenticationError):
    """Tampered, garbage, or wrong-scheme token."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class TokenExpiredError(AuthenticationError):
    """Signature checks out but the lifetime window has passed."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. Deliberately says which of neither."""

    status_code = 403

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


# ─── Conflicts ──────────────────────────────────────────


class ConflictError(WardenError):
    """A unique key is already taken."""

    status_code = 409


class EmailAlreadyExistsError(ConflictError):
    def __init__(self, message: str = "Email already exists"):
        super().__init__(message, code="EMAIL_EXISTS")


# ─── Not found ──────────────────────────────────────────


class NotFoundError(WardenError):
    """Absent, or not owned by the caller. The two are indistinguishable."""

    status_code = 404


class ResourceNotFoundError(NotFoundError):
    def __init__(self, resource_id: int):
        super().__init__(
            "Resource not found",
            code="RESOURCE_NOT_FOUND",
            details={"resource_id": resource_id},
        )


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


# ─── Integrity faults ───────────────────────────────────


class IntegrityFault(WardenError):
    """Corrupt stored data or broken configuration. Not user-recoverable."""

    status_code = 500


class CredentialIntegrityError(IntegrityFault):
    """A stored password hash is malformed, or hashing itself failed."""

    def __init__(self, message: str = "Stored credential is corrupt"):
        super().__init__(message, code="CREDENTIAL_INTEGRITY")


class SigningConfigError(IntegrityFault):
    def __init__(self, message: str = "Token signing is misconfigured"):
        super().__init__(message, code="SIGNING_CONFIG")
